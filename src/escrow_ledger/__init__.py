"""Single-item escrow ledger: one seller, one buyer, atomic settlement."""

__version__ = "0.1.0"

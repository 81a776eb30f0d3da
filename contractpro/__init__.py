"""ContractPro: contract and invoice management for freelancers."""

__version__ = "1.0.0"

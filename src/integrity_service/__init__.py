"""FM Integrity Service - document digests, verification and audit trail"""

__version__ = "0.1.0"

"""LeadFlow: retail lead lifecycle and scoring engine."""

__version__ = "1.0.0"

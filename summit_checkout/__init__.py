"""Research Summits checkout: remote catalog pricing and Stripe charges."""

__version__ = "1.0.0"

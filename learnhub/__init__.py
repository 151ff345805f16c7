"""LearnHub: an e-learning marketplace API with referral earnings and payouts."""

__version__ = "0.1.0"

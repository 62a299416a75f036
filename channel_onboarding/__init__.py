"""Client onboarding service: YouTube channel provisioning backed by Google Sheets."""

__version__ = "0.1.0"

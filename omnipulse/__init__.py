"""OmniPulse: turn generated market analysis text into validated reports and chart series."""

__version__ = "1.0.0"

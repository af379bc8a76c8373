"""Exchange rate sources."""

from fop_tax.infrastructure.rates.nbu import NBU_API_URL, NBURateClient

__all__ = ["NBU_API_URL", "NBURateClient"]

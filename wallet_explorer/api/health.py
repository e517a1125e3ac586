from fastapi import APIRouter
from typing import Dict, Any
from ..providers.alchemy import AlchemyProvider
from ..providers.etherscan import EtherscanProvider

router = APIRouter()

# "configured" means a key is present but the provider offers no cheap probe
_OK_STATUSES = {"healthy", "configured"}


@router.get("/healthz")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint that verifies provider status"""

    providers = {
        "etherscan": EtherscanProvider(),
        "alchemy": AlchemyProvider(),
    }
    provider_status = {
        name: await provider.health_check()
        for name, provider in providers.items()
    }

    available_providers = sum(
        1 for status in provider_status.values()
        if status["status"] in _OK_STATUSES
    )

    return {
        "status": "healthy" if available_providers == len(provider_status) else "degraded",
        "providers": provider_status,
        "available_providers": available_providers,
        "total_providers": len(provider_status)
    }

"""
Constraint API endpoints.
"""

from fastapi import APIRouter, Depends

from stockfolio.api.dependencies import get_engine
from stockfolio.api.schemas.api_models import ConstraintValidationRequest, ValidationResponse
from stockfolio.core.engine import PortfolioEngine
from stockfolio.core.models import ConstraintConfig

router = APIRouter()


@router.post("/validate")
async def validate_constraints(
    request: ConstraintValidationRequest,
    engine: PortfolioEngine = Depends(get_engine),
) -> ValidationResponse:
    """Check a constraint configuration and report every violated rule."""
    result = engine.validate(
        ConstraintConfig(
            max_holdings=request.max_holdings,
            max_allocation_percent=request.max_allocation_percent,
            budget=request.budget,
        )
    )
    return ValidationResponse(is_valid=result.is_valid, errors=list(result.errors))

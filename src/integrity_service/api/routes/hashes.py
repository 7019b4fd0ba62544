"""
Hash API Routes

Stateless digest helpers.
"""

from fastapi import APIRouter

from integrity_service.api.dependencies import to_http_exception
from integrity_service.core.digest import resolve_algorithm, validate_format
from integrity_service.core.exceptions import UnsupportedAlgorithm
from integrity_service.models import DIGEST_LENGTHS, HashValidationRequest, HashValidationResponse

router = APIRouter(prefix="/api/v1/hashes", tags=["hashes"])


@router.post(
    "/validate",
    response_model=HashValidationResponse,
    summary="Validate Hash Format",
    description="Checks that `hash` is hexadecimal with the exact length produced by `algorithm`.",
    responses={400: {"description": "Unsupported algorithm"}}
)
async def validate_hash(request: HashValidationRequest) -> HashValidationResponse:
    """Validate hash format"""
    try:
        algorithm = resolve_algorithm(request.algorithm)
    except UnsupportedAlgorithm as e:
        raise to_http_exception(e)

    return HashValidationResponse(
        is_valid=validate_format(request.hash, algorithm),
        algorithm=algorithm,
        expected_length=DIGEST_LENGTHS[algorithm],
        actual_length=len(request.hash)
    )

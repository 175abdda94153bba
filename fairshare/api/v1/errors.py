from fastapi import HTTPException, status

from fairshare.core.result import AllocationFailure, FailureKind, Result

FAILURE_STATUS = {
    FailureKind.UNKNOWN_EXPENSE: status.HTTP_404_NOT_FOUND,
    FailureKind.IMBALANCED_LEDGER: status.HTTP_409_CONFLICT,
}


def raise_for_failure(result: Result) -> None:
    """Turn a failed result into an HTTP error; successful results pass through."""
    if isinstance(result, AllocationFailure):
        raise HTTPException(
            status_code=FAILURE_STATUS.get(result.kind, status.HTTP_422_UNPROCESSABLE_ENTITY),
            detail={"kind": result.kind.value, "message": result.detail}
        )

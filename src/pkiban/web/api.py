"""
FastAPI web application for the pkiban IBAN generator.

This module provides REST API endpoints for:
- Listing the supported banks (for the bank picker)
- Live validation of the account-number field
- IBAN generation
- IBAN verification with the mod-97 check

The browser front-end owns its own field state and clipboard; this API only
exposes the stateless core.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, Depends, HTTPException, status
from pydantic import BaseModel

# Internal imports
from .. import __version__
from ..config import load_config
from ..core.builder import IBANBuilder
from ..core.checksum import is_valid_iban
from ..core.validators import normalize_spaces

logger = logging.getLogger(__name__)

# Pydantic models for API requests/responses
class BankResponse(BaseModel):
    """One entry of the bank picker."""
    name: str
    code: str
    logo: str

class AccountValidationRequest(BaseModel):
    """Account-number field value, as typed."""
    account_number: Optional[str] = None

class AccountValidationResponse(BaseModel):
    valid: bool
    kind: Optional[str] = None
    message: str = ""

class GenerateRequest(BaseModel):
    """Request model for IBAN generation."""
    account_number: Optional[str] = None
    bank_code: Optional[str] = None

class GenerateResponse(BaseModel):
    """Generated IBAN in electronic and display form."""
    iban: str
    formatted: str
    bank: BankResponse

class VerifyRequest(BaseModel):
    iban: str

class VerifyResponse(BaseModel):
    iban: str
    valid: bool

# FastAPI app configuration
app = FastAPI(
    title="pkiban API",
    description="Pakistan IBAN generator",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Global configuration (PKIBAN_CONFIG points at an optional YAML file)
_config_path = os.getenv("PKIBAN_CONFIG")
pkiban_config = load_config(Path(_config_path) if _config_path else None)
builder = IBANBuilder.from_config(pkiban_config)

def get_builder() -> IBANBuilder:
    """IBAN builder bound to the configured bank registry."""
    return builder

@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "pkiban API - Pakistan IBAN generator",
        "version": __version__,
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "pkiban-api"}

@app.get("/banks", response_model=List[BankResponse])
async def list_banks(builder: IBANBuilder = Depends(get_builder)):
    """Supported banks, sorted by display name."""
    return [BankResponse(name=b.name, code=b.code, logo=b.logo) for b in builder.banks]

@app.post("/validate-account", response_model=AccountValidationResponse)
async def validate_account(
    request: AccountValidationRequest,
    builder: IBANBuilder = Depends(get_builder)
):
    """Live validation for the account-number field (called on each edit)."""
    failure = builder.validate(request.account_number)
    if failure is None:
        return AccountValidationResponse(valid=True)
    return AccountValidationResponse(valid=False, kind=failure.kind.value, message=failure.message)

@app.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    builder: IBANBuilder = Depends(get_builder)
):
    """
    Generate the IBAN for an account number and bank.

    Returns:
        GenerateResponse, or HTTP 422 with the validation failure
    """
    try:
        result = builder.generate(request.account_number, request.bank_code)
        if not result.ok:
            raise HTTPException(
                status_code=422,
                detail={"kind": result.error.kind.value, "message": result.error.message}
            )
        logger.info("Generated IBAN for bank %s", result.bank.code)
        return GenerateResponse(
            iban=result.iban,
            formatted=result.formatted,
            bank=BankResponse(name=result.bank.name, code=result.bank.code, logo=result.bank.logo)
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in generate: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

@app.post("/verify", response_model=VerifyResponse)
async def verify(request: VerifyRequest):
    """Check an IBAN with the ISO 13616 mod-97 rule."""
    iban = normalize_spaces(request.iban).upper()
    return VerifyResponse(iban=iban, valid=is_valid_iban(iban))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)

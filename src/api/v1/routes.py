"""
API v1 routes.

Defines REST endpoints for the Charity Registry API. Write endpoints unwrap
the domain Result; failures surface as RegistryError and are rendered by the
handler in src.api.errors.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_caller, get_registry_service
from src.api.models import (
    AcceptedResponse,
    AuthorityRequest,
    CharityResponse,
    CharityUpdateResponse,
    CountResponse,
    ErrorResponse,
    ExistenceResponse,
    FeeRequest,
    RegisterCharityRequest,
    RegisterCharityResponse,
    UpdateCharityRequest,
)
from src.domain.registry import CharityRegistryService

router = APIRouter(tags=["v1"])


@router.put(
    "/authority",
    response_model=AcceptedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Reserved principal"},
        409: {"model": ErrorResponse, "description": "Authority contract already bound"},
    },
    summary="Bind the authority contract",
    description="Bind the principal that receives registration fees. "
    "The binding can be made exactly once.",
)
async def set_authority_contract(
    request_data: AuthorityRequest,
    service: CharityRegistryService = Depends(get_registry_service),
) -> AcceptedResponse:
    service.set_authority_contract(request_data.principal).unwrap()
    return AcceptedResponse()


@router.put(
    "/fee",
    response_model=AcceptedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid fee"},
        409: {"model": ErrorResponse, "description": "No authority contract bound"},
    },
    summary="Set the registration fee",
)
async def set_registration_fee(
    request_data: FeeRequest,
    service: CharityRegistryService = Depends(get_registry_service),
) -> AcceptedResponse:
    service.set_registration_fee(request_data.amount).unwrap()
    return AcceptedResponse()


@router.post(
    "/charities",
    response_model=RegisterCharityResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid field"},
        402: {"model": ErrorResponse, "description": "Registration fee transfer refused"},
        403: {"model": ErrorResponse, "description": "Caller is not a verified authority"},
        409: {"model": ErrorResponse, "description": "Duplicate name, capacity or no authority"},
        422: {"description": "Validation error"},
    },
    summary="Register a charity",
    description="Register a charity on behalf of the calling principal. "
    "The registration fee is transferred to the authority contract.",
)
async def register_charity(
    request_data: RegisterCharityRequest,
    caller: str = Depends(get_caller),
    service: CharityRegistryService = Depends(get_registry_service),
) -> RegisterCharityResponse:
    charity_id = service.register_charity(
        name=request_data.name,
        description=request_data.description,
        proof_hash=request_data.proof_hash_bytes(),
        category=request_data.category,
        location=request_data.location,
        currency=request_data.currency,
        min_donation=request_data.min_donation,
        max_goal=request_data.max_goal,
        charity_type=request_data.charity_type,
        contact_info=request_data.contact_info,
        verification_level=request_data.verification_level,
        caller=caller,
    ).unwrap()
    return RegisterCharityResponse(id=charity_id)


@router.get("/charities/count", response_model=CountResponse, summary="Count charities")
async def get_charity_count(
    service: CharityRegistryService = Depends(get_registry_service),
) -> CountResponse:
    return CountResponse(count=service.get_charity_count())


@router.get(
    "/charities/exists",
    response_model=ExistenceResponse,
    summary="Check whether a charity name is registered",
)
async def check_charity_existence(
    name: str = Query(...),
    service: CharityRegistryService = Depends(get_registry_service),
) -> ExistenceResponse:
    return ExistenceResponse(name=name, exists=service.check_charity_existence(name))


@router.get(
    "/charities/{charity_id}",
    response_model=CharityResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown charity"}},
    summary="Get a charity",
)
async def get_charity(
    charity_id: int,
    service: CharityRegistryService = Depends(get_registry_service),
) -> CharityResponse:
    charity = service.get_charity(charity_id)
    if charity is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charity not found")
    return CharityResponse.from_domain(charity_id, charity)


@router.get(
    "/charities/{charity_id}/update",
    response_model=CharityUpdateResponse,
    responses={404: {"model": ErrorResponse, "description": "No update recorded"}},
    summary="Get the latest update of a charity",
)
async def get_charity_update(
    charity_id: int,
    service: CharityRegistryService = Depends(get_registry_service),
) -> CharityUpdateResponse:
    record = service.get_charity_update(charity_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No update recorded")
    return CharityUpdateResponse.from_domain(record)


@router.patch(
    "/charities/{charity_id}",
    response_model=AcceptedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid field"},
        403: {"model": ErrorResponse, "description": "Caller is not the creator"},
        404: {"model": ErrorResponse, "description": "Unknown charity"},
        409: {"model": ErrorResponse, "description": "Name taken by another charity"},
    },
    summary="Update a charity",
    description="Rename and re-describe a charity. Only its creator may update it.",
)
async def update_charity(
    charity_id: int,
    request_data: UpdateCharityRequest,
    caller: str = Depends(get_caller),
    service: CharityRegistryService = Depends(get_registry_service),
) -> AcceptedResponse:
    service.update_charity(
        charity_id,
        request_data.update_name,
        request_data.update_description,
        caller=caller,
    ).unwrap()
    return AcceptedResponse()

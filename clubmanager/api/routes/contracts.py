"""Contract route handlers."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clubmanager.api.routes import service_error, not_found
from clubmanager.database.db import get_db_session
from clubmanager.models.schemas import ContractRequest, CreateContractResponse, MessageResponse
from clubmanager.services import data_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/api/contracts")
async def list_contracts(session: AsyncSession = Depends(get_db_session)):
    """All contracts with player and club names, highest salary first."""
    try:
        return await data_service.list_contracts(session)
    except Exception as e:
        raise service_error(e, "Failed to fetch contracts")


@router.get("/api/contracts/{contract_id}")
async def get_contract(contract_id: int, session: AsyncSession = Depends(get_db_session)):
    try:
        contract = await data_service.get_contract(session, contract_id)
    except Exception as e:
        raise service_error(e, "Failed to fetch contract")
    if contract is None:
        raise not_found("Contract")
    return contract


@router.post("/api/contracts", status_code=201, response_model=CreateContractResponse)
async def create_contract(
    request: ContractRequest, session: AsyncSession = Depends(get_db_session)
):
    try:
        contract_id = await data_service.create_contract(session, request.model_dump())
    except Exception as e:
        raise service_error(e, "Failed to create contract")
    return CreateContractResponse(message="Contract created successfully", contract_id=contract_id)


@router.delete("/api/contracts/{contract_id}", response_model=MessageResponse)
async def delete_contract(contract_id: int, session: AsyncSession = Depends(get_db_session)):
    try:
        deleted = await data_service.delete_contract(session, contract_id)
    except Exception as e:
        raise service_error(e, "Failed to delete contract")
    if not deleted:
        raise not_found("Contract")
    return MessageResponse(message="Contract deleted successfully")

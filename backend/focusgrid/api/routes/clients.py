from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from focusgrid.api.deps import get_db
from focusgrid.schemas.client import (
    ClientCreate,
    ClientEnvelope,
    ClientFeaturesUpdate,
    ClientList,
    ClientRead,
    ClientUpdate,
)
from focusgrid.schemas.common import SuccessResponse
from focusgrid.services.client import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=ClientList)
def list_clients(session: Session = Depends(get_db)) -> ClientList:
    service = ClientService(session)
    return ClientList(clients=[ClientRead.model_validate(item) for item in service.list_clients()])


@router.post("", response_model=ClientEnvelope, status_code=status.HTTP_201_CREATED)
def create_client(payload: ClientCreate, session: Session = Depends(get_db)) -> ClientEnvelope:
    service = ClientService(session)
    client = service.create_client(payload)
    return ClientEnvelope(client=ClientRead.model_validate(client))


@router.put("/{client_id}", response_model=ClientEnvelope)
def update_client(
    client_id: str,
    payload: ClientUpdate,
    session: Session = Depends(get_db),
) -> ClientEnvelope:
    service = ClientService(session)
    client = service.update_client(client_id, payload)
    return ClientEnvelope(client=ClientRead.model_validate(client))


@router.put("/{client_id}/features", response_model=SuccessResponse)
def update_client_features(
    client_id: str,
    payload: ClientFeaturesUpdate,
    session: Session = Depends(get_db),
) -> SuccessResponse:
    service = ClientService(session)
    service.update_client_features(client_id, payload.features)
    return SuccessResponse()


@router.delete("/{client_id}", response_model=SuccessResponse)
def delete_client(client_id: str, session: Session = Depends(get_db)) -> SuccessResponse:
    service = ClientService(session)
    service.delete_client(client_id)
    return SuccessResponse()

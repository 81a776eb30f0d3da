"""Client service for owner-scoped client records."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_, select

from contractpro.core.exceptions import NotFoundError
from contractpro.models import Client
from contractpro.services.base_service import BaseService, Page

logger = logging.getLogger(__name__)

CLIENT_NOT_FOUND = "Client not found"

UPDATABLE_FIELDS = (
    "name",
    "email",
    "company",
    "phone",
    "street",
    "city",
    "state",
    "zip_code",
    "country",
    "notes",
)


class ClientService(BaseService):
    """Service for client CRUD; every query is scoped to the owning user."""

    def _active(self, user_id: str):
        return select(Client).where(Client.user_id == user_id, Client.is_active.is_(True))

    def create_client(self, user_id: str, **fields: Any) -> Client:
        client = Client(user_id=user_id, **{key: fields[key] for key in UPDATABLE_FIELDS if key in fields})
        if client.email:
            client.email = client.email.strip().lower()
        self.save(client)
        logger.info("client.created", extra={"event": "client.created", "client_id": client.id})
        return client

    def get_client(self, user_id: str, client_id: str) -> Client:
        client = self.db.scalars(self._active(user_id).where(Client.id == client_id)).first()
        if client is None:
            raise NotFoundError(CLIENT_NOT_FOUND)
        return client

    def list_clients(self, user_id: str, page: int = 1, limit: int = 10, search: str | None = None) -> Page[Client]:
        stmt = self._active(user_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(Client.name.ilike(pattern), Client.company.ilike(pattern), Client.email.ilike(pattern))
            )
        return self.paginate(stmt.order_by(Client.created_at.desc()), page=page, limit=limit)

    def update_client(self, user_id: str, client_id: str, **fields: Any) -> Client:
        client = self.get_client(user_id, client_id)
        for key in UPDATABLE_FIELDS:
            if key in fields:
                setattr(client, key, fields[key])
        if "email" in fields and client.email:
            client.email = client.email.strip().lower()
        return self.save(client)

    def delete_client(self, user_id: str, client_id: str) -> None:
        client = self.get_client(user_id, client_id)
        client.is_active = False
        self.save(client)
        logger.info("client.deactivated", extra={"event": "client.deactivated", "client_id": client_id})


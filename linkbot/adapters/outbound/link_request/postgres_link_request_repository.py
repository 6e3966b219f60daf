"""Postgres-backed link request repository adapter."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkbot.adapters.outbound.persistence.models import LinkRequestModel
from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.ports.errors import RepositoryError
from linkbot.application.ports.link_request_repository import LinkRequestRepository
from linkbot.domain.value_objects.request_input import RequestType
from linkbot.infrastructure.db import get_db_session
from linkbot.infrastructure.logging.logger import logger


class PostgresLinkRequestRepository(LinkRequestRepository):
    """Postgres implementation of link request repository."""

    def _model_to_dto(self, model: LinkRequestModel) -> LinkRequest:
        """
        Convert LinkRequestModel to LinkRequest DTO.

        Args:
            model: SQLAlchemy model instance

        Returns:
            LinkRequest DTO
        """
        # Ensure created_at is timezone-aware (SQLite returns naive datetimes)
        created_at = model.created_at
        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return LinkRequest(
            token=model.token,
            user_id=model.user_id,
            request_type=RequestType(model.request_type),
            request_value=model.request_value,
            generated_link=model.generated_link,
            created_at=created_at or datetime.now(timezone.utc),
        )

    async def get(self, token: str) -> Optional[LinkRequest]:
        """
        Get a link request by token.

        Args:
            token: Public request token

        Returns:
            LinkRequest DTO, or None if not found
        """
        db: Session = get_db_session()
        try:
            model = db.query(LinkRequestModel).filter(LinkRequestModel.token == token).first()
            if model is None:
                return None
            return self._model_to_dto(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting link request {token}: {str(e)}")
            raise RepositoryError(f"Failed to get link request {token}") from e
        finally:
            db.close()

    async def save(self, link_request: LinkRequest) -> None:
        """
        Save a link request (upsert by token).

        Args:
            link_request: LinkRequest DTO to save
        """
        db: Session = get_db_session()
        try:
            model = (
                db.query(LinkRequestModel)
                .filter(LinkRequestModel.token == link_request.token)
                .first()
            )

            if model:
                model.user_id = link_request.user_id
                model.request_type = link_request.request_type.value
                model.request_value = link_request.request_value
                model.generated_link = link_request.generated_link
            else:
                model = LinkRequestModel(
                    token=link_request.token,
                    user_id=link_request.user_id,
                    request_type=link_request.request_type.value,
                    request_value=link_request.request_value,
                    generated_link=link_request.generated_link,
                    created_at=link_request.created_at,
                )
                db.add(model)

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Database error while saving link request {link_request.token}: {str(e)}"
            )
            raise RepositoryError(f"Failed to save link request {link_request.token}") from e
        finally:
            db.close()

"""Postgres-backed user repository adapter."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkbot.adapters.outbound.persistence.models import UserModel
from linkbot.application.dtos.user import TelegramUser
from linkbot.application.ports.errors import RepositoryError
from linkbot.application.ports.user_repository import UserRepository
from linkbot.infrastructure.db import get_db_session
from linkbot.infrastructure.logging.logger import logger


class PostgresUserRepository(UserRepository):
    """Postgres implementation of user repository."""

    async def upsert(self, user: TelegramUser) -> None:
        """
        Insert a user or overwrite its metadata (last write wins).

        Args:
            user: User identity and metadata
        """
        db: Session = get_db_session()
        try:
            model = db.query(UserModel).filter(UserModel.telegram_id == user.id).first()

            if model:
                model.username = user.username
                model.first_name = user.first_name
                model.last_name = user.last_name
            else:
                model = UserModel(
                    telegram_id=user.id,
                    username=user.username,
                    first_name=user.first_name,
                    last_name=user.last_name,
                )
                db.add(model)

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while upserting user {user.id}: {str(e)}")
            raise RepositoryError(f"Failed to upsert user {user.id}") from e
        finally:
            db.close()

"""Postgres-backed conversation state repository adapter."""

from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from linkbot.adapters.outbound.persistence.models import UserStateModel
from linkbot.application.ports.conversation_state_repository import ConversationStateRepository
from linkbot.application.ports.errors import RepositoryError
from linkbot.domain.entities.conversation_state import FlowState
from linkbot.infrastructure.db import get_db_session
from linkbot.infrastructure.logging.logger import logger


class PostgresConversationStateRepository(ConversationStateRepository):
    """Postgres implementation of conversation state repository."""

    async def get(self, user_id: int) -> FlowState:
        """
        Get the flow state for a user.

        Args:
            user_id: Telegram user identifier

        Returns:
            Stored state, or FlowState.NO_FLOW if there is no record
        """
        db: Session = get_db_session()
        try:
            model = db.query(UserStateModel).filter(UserStateModel.user_id == user_id).first()
            if model is None or not model.state:
                return FlowState.NO_FLOW
            try:
                return FlowState(model.state)
            except ValueError:
                # Unknown values written by older deployments do not gate the flow
                logger.warning(f"Unknown state {model.state!r} stored for user {user_id}")
                return FlowState.NO_FLOW
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting state for user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to get state for user {user_id}") from e
        finally:
            db.close()

    async def set(self, user_id: int, state: FlowState) -> None:
        """
        Persist the flow state for a user (upsert by user_id).

        Args:
            user_id: Telegram user identifier
            state: State to store
        """
        if state == FlowState.NO_FLOW:
            await self.clear(user_id)
            return

        db: Session = get_db_session()
        try:
            model = db.query(UserStateModel).filter(UserStateModel.user_id == user_id).first()
            now = datetime.now(timezone.utc)

            if model:
                model.state = state.value
                model.updated_at = now
            else:
                model = UserStateModel(user_id=user_id, state=state.value, updated_at=now)
                db.add(model)

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving state for user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to save state for user {user_id}") from e
        finally:
            db.close()

    async def clear(self, user_id: int) -> None:
        """
        Delete the flow state for a user.

        Args:
            user_id: Telegram user identifier
        """
        db: Session = get_db_session()
        try:
            db.query(UserStateModel).filter(UserStateModel.user_id == user_id).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while deleting state for user {user_id}: {str(e)}")
            raise RepositoryError(f"Failed to delete state for user {user_id}") from e
        finally:
            db.close()

"""Telegram inbound adapter: handlers and the reply dispatcher."""

import logging
from typing import Optional
from uuid import uuid4

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update, User
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from linkbot.application.dtos.flow import FlowOutcome, FlowResult
from linkbot.application.dtos.user import TelegramUser
from linkbot.application.use_cases.link_request_flow_use_case import LinkRequestFlowUseCase
from linkbot.application.use_cases.user_messages_ru import UserMessagesRU
from linkbot.domain.value_objects.request_input import InvalidRequestInputError
from linkbot.infrastructure.logging.logger import log_event, logger

GET_LINK_ACTION = "get_link"


def build_owner_keyboard() -> InlineKeyboardMarkup:
    """Keyboard with the single "get link" button."""
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton(UserMessagesRU.GET_LINK_BUTTON, callback_data=GET_LINK_ACTION)]]
    )


def build_sponsor_keyboard(links: list[str]) -> Optional[InlineKeyboardMarkup]:
    """
    Build URL buttons for sponsor links, two per row.

    Args:
        links: Sponsor links

    Returns:
        Inline keyboard, or None when there are no links
    """
    buttons = [
        InlineKeyboardButton(UserMessagesRU.sponsor_button(i + 1), url=link)
        for i, link in enumerate(links)
    ]
    rows = [buttons[i : i + 2] for i in range(0, len(buttons), 2)]
    if not rows:
        return None
    return InlineKeyboardMarkup(rows)


def to_telegram_user(user: User) -> TelegramUser:
    """Map a python-telegram-bot User to the application DTO."""
    return TelegramUser(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
    )


class TelegramBotHandlers:
    """Update handlers delegating to the link request flow."""

    def __init__(self, flow_use_case: LinkRequestFlowUseCase, sponsor_links: list[str]) -> None:
        """
        Initialize handlers.

        Args:
            flow_use_case: Link request flow use case
            sponsor_links: Links shown to users other than the owner
        """
        self._flow = flow_use_case
        self._sponsor_links = sponsor_links

    def reply_for(self, result: FlowResult) -> Optional[tuple[str, Optional[InlineKeyboardMarkup]]]:
        """
        Map a flow result to the reply to send.

        Args:
            result: Result of a flow step

        Returns:
            (text, keyboard) pair, or None when nothing should be sent
        """
        outcome = result.outcome
        if outcome == FlowOutcome.GREETED_OWNER:
            return UserMessagesRU.OWNER_GREETING, build_owner_keyboard()
        if outcome == FlowOutcome.GREETED_GUEST:
            return UserMessagesRU.SPONSOR_PROMPT, build_sponsor_keyboard(self._sponsor_links)
        if outcome == FlowOutcome.PROMPTED:
            return UserMessagesRU.ASK_REQUEST, None
        if outcome == FlowOutcome.LINK_CREATED:
            return UserMessagesRU.link_ready(result.link or ""), None
        if outcome == FlowOutcome.VALIDATION_ERROR:
            if result.validation_reason == InvalidRequestInputError.NON_POSITIVE_STARS:
                return UserMessagesRU.NON_POSITIVE_STARS, None
            return UserMessagesRU.INVALID_REQUEST, None
        if outcome == FlowOutcome.PERSISTENCE_ERROR:
            return UserMessagesRU.GENERIC_ERROR, None
        # UNAVAILABLE is answered on the callback query; IGNORED gets no reply
        return None

    async def dispatch(
        self, result: FlowResult, chat_id: int, context: ContextTypes.DEFAULT_TYPE, event_id: str
    ) -> None:
        """
        Send the reply for a flow result.

        Args:
            result: Result of a flow step
            chat_id: Chat to reply in
            context: Handler context (gives access to the bot)
            event_id: Event identifier for logging
        """
        level = logging.WARNING if result.is_error else logging.INFO
        log_event(result.user_id, event_id, "telegram", level=level, outcome=result.outcome.value)
        reply = self.reply_for(result)
        if reply is None:
            return
        text, keyboard = reply
        try:
            await context.bot.send_message(chat_id=chat_id, text=text, reply_markup=keyboard)
        except TelegramError as e:
            # Side effects are already stored; only the reply is lost
            log_event(
                result.user_id,
                event_id,
                "telegram",
                level=logging.ERROR,
                send_failed=str(e),
            )

    async def on_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start."""
        if update.effective_user is None or update.effective_chat is None:
            return
        event_id = str(uuid4())
        user = to_telegram_user(update.effective_user)
        result = await self._flow.greet(user, event_id=event_id)
        await self.dispatch(result, update.effective_chat.id, context, event_id)

    async def on_get_link(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle the "get link" inline button."""
        query = update.callback_query
        if query is None or update.effective_chat is None:
            return
        event_id = str(uuid4())
        user = to_telegram_user(query.from_user)

        if self._flow.is_owner(user.id):
            await query.answer()
        else:
            await query.answer(UserMessagesRU.ACTION_UNAVAILABLE)

        result = await self._flow.trigger(user, event_id=event_id)
        await self.dispatch(result, update.effective_chat.id, context, event_id)

    async def on_text(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle free text messages."""
        message = update.message
        if message is None or update.effective_user is None or update.effective_chat is None:
            return
        event_id = str(uuid4())
        user = to_telegram_user(update.effective_user)
        result = await self._flow.submit_text(user, message.text or "", event_id=event_id)
        await self.dispatch(result, update.effective_chat.id, context, event_id)

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log errors raised while handling updates."""
        logger.error(f"Error while handling update {update!r}: {context.error!r}")


def build_application(bot_token: str, handlers: TelegramBotHandlers) -> Application:
    """
    Build the python-telegram-bot application with all handlers registered.

    Args:
        bot_token: Bot API token
        handlers: Handler collection

    Returns:
        Application ready to be initialized and started
    """
    application = Application.builder().token(bot_token).build()
    application.add_handler(CommandHandler("start", handlers.on_start))
    application.add_handler(
        CallbackQueryHandler(handlers.on_get_link, pattern=f"^{GET_LINK_ACTION}$")
    )
    # /start matches the CommandHandler first; any other slash-text reaches the flow
    application.add_handler(MessageHandler(filters.TEXT, handlers.on_text))
    application.add_error_handler(handlers.on_error)
    return application

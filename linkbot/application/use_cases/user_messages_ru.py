"""Russian user-facing messages for the link bot."""


class UserMessagesRU:
    """Centralized Russian user-facing messages."""

    # /start
    OWNER_GREETING = (
        "Привет! Я бот, который помогает забирать NFT-подарок или звёзды "
        "у другого пользователя по специальной ссылке."
    )
    GET_LINK_BUTTON = "Получить ссылку"
    SPONSOR_PROMPT = "Пожалуйста, подпишитесь на всех спонсоров и вернитесь."

    @staticmethod
    def sponsor_button(position: int) -> str:
        """Label for the sponsor button at a 1-based position."""
        return f"Спонсор {position}"

    # Link request flow
    ACTION_UNAVAILABLE = "Действие недоступно."
    ASK_REQUEST = "Отправьте количество звёзд (числом) или ссылку на NFT, которую хотите забрать."
    INVALID_REQUEST = (
        "Пожалуйста, отправьте положительное число (звёзды) или корректную ссылку (NFT)."
    )
    NON_POSITIVE_STARS = "Количество звёзд должно быть больше 0. Попробуйте снова."

    @staticmethod
    def link_ready(link: str) -> str:
        """Reply sent once the link request is stored."""
        return f"Готово! Ваша уникальная ссылка: {link}"

    # Errors
    GENERIC_ERROR = "Произошла ошибка. Попробуйте ещё раз."

    # Link page
    PAGE_TITLE = "Ваша ссылка"
    PAGE_NOT_FOUND_TITLE = "Ссылка не найдена"
    PAGE_NOT_FOUND_TEXT = "Ссылка не найдена или срок её действия истёк."
    PAGE_ERROR_TITLE = "Ошибка"
    PAGE_ERROR_TEXT = "Не удалось загрузить ссылку. Попробуйте позже."
    PAGE_COPY_BUTTON = "Скопировать ссылку"
    PAGE_COPIED = "Ссылка скопирована!"
    PAGE_COPY_FAILED = "Не удалось скопировать автоматически. Нажмите кнопку ещё раз."

    @staticmethod
    def stars_label(count: int) -> str:
        """
        Star count with the unit label in the correct plural form.

        Args:
            count: Number of stars

        Returns:
            e.g. "1 звезда", "3 звезды", "42 звезды", "11 звёзд"
        """
        last_two = count % 100
        last = count % 10
        if 11 <= last_two <= 14:
            unit = "звёзд"
        elif last == 1:
            unit = "звезда"
        elif 2 <= last <= 4:
            unit = "звезды"
        else:
            unit = "звёзд"
        return f"{count} {unit}"

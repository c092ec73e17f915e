from typing import Iterable, Iterator

from .message import Message


class ConversationLog:
    """Append-only, ordered record of the messages exchanged by one assistant.

    The log hands out tuples so that callers can pass a snapshot to the chat
    backend without being able to reorder or drop entries.
    """

    def __init__(self, system_prompt: Message) -> None:
        self._messages: list[Message] = [system_prompt]

    def append(self, messages: Iterable[Message]) -> tuple[Message, ...]:
        """
        Add messages to the end of the log.

        Args:
            messages: Messages in the order they should be recorded

        Returns:
            Snapshot of the full log after appending
        """
        self._messages.extend(messages)
        return self.messages

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def system_prompt(self) -> Message:
        return self._messages[0]

    @property
    def last(self) -> Message:
        return self._messages[-1]

    def to_dicts(self) -> list[dict[str, str]]:
        return [message.to_dict() for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

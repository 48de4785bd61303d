"""Reply returned to the chat front end."""

from dataclasses import dataclass, field


@dataclass
class CommandReply:
    """Rendered command outcome.

    ``title`` and ``fields`` map onto an embed; plain replies only set
    ``content``. ``ephemeral`` replies are shown to the caller only.
    """

    content: str = ""
    title: str | None = None
    fields: list[tuple[str, str]] = field(default_factory=list)
    ephemeral: bool = False
    ok: bool = True

import re
from typing import Iterable

# Opening fence with an optional info string, body up to the closing fence or end of text.
_FENCED_BLOCK = re.compile(r'```[^\n`]*\n(.*?)(?:```|\Z)', re.DOTALL)
_COMMENT_MARKERS = ('#', '//')


def find_fenced_block(text: str) -> str | None:
    """Return the body of the first fenced code block in text, if any."""
    match = _FENCED_BLOCK.search(text)
    if match is None:
        return None
    return match.group(1)


def is_comment(line: str) -> bool:
    return line.lstrip().startswith(_COMMENT_MARKERS)


def extract_commands(text: str | None) -> list[str]:
    """Extract shell commands from an LLM response.

    Commands are read from the first fenced block, or from the whole text when
    there is none. Blank lines, comment lines and lines holding a fence marker
    are dropped, the rest is trimmed and kept in order. Never raises.
    """
    if not text:
        return []
    block = find_fenced_block(text)
    region = block if block is not None else text
    commands = []
    for line in region.splitlines():
        stripped = line.strip()
        if not stripped or is_comment(stripped) or '```' in stripped:
            continue
        commands.append(stripped)
    return commands


def format_commands_block(commands: Iterable[str], language: str = 'bash') -> str:
    """Render commands as a fenced block, the format extract_commands reads back."""
    body = '\n'.join(commands)
    if body:
        body += '\n'
    return f'```{language}\n{body}```'

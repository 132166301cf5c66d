"""LLM Base Classes and Shared Code"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_HEADER_LENGTH = 72
MAX_TOKENS = 1000
DEFAULT_TIMEOUT = 120
DEBUG_FILENAME = "aicommit-debug-request.json"

HEADER_MARKER = "HEADER:"
DESCRIPTION_MARKER = "DESCRIPTION:"

# Providers are tuned to this exact wording, keep it verbatim.
COMMIT_PROMPT = """Analyze this git diff and suggest a commit message.

CRITICAL: You must respond in EXACTLY this format. Do not add any other text, explanations, or formatting:

HEADER: [your header text here]
DESCRIPTION: [your description text here]

STRICT REQUIREMENTS:
- Start with exactly "HEADER: " (including the space after colon)
- Header must be 50 characters or less
- Use imperative mood (Add, Fix, Update - NOT Added, Fixed, Updated)
- Then a blank line
- Then start with exactly "DESCRIPTION: " (including the space after colon)
- Description should explain what changed and why
- Do not use markdown, bullets, or special formatting
- Do not add introductory text like "Here's a suggested commit message"
- Do not add closing text or explanations
- Your response should contain ONLY these two lines

EXAMPLE FORMAT:
HEADER: Add user authentication system
DESCRIPTION: Implements login/logout functionality with JWT tokens and password hashing for secure user management

Now analyze this diff:

{diff}"""


def build_prompt(diff: str) -> str:
    # str.replace rather than str.format: diffs are full of braces
    return COMMIT_PROMPT.replace("{diff}", diff)


class LLMError(Exception):
    """Raised when LLM operations fail."""
    debug_path: str | None = None


class MissingAPIKeyError(LLMError):
    pass


class UnsupportedProviderError(LLMError):
    pass


class RemoteTransportError(LLMError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""
    pass


class RemoteAPIError(LLMError):
    """The provider answered with a non-2xx status or an unreadable body."""

    def __init__(self, text: str, status: int | None = None, message: str | None = None):
        super().__init__(text)
        self.status = status
        self.message = message


class AuthError(RemoteAPIError):
    pass


class EmptyResponseError(LLMError):
    pass


class ParseError(LLMError):
    pass


class NoHeaderFoundError(ParseError):
    pass


@dataclass
class CommitMessage:
    """A commit message split into header and description."""
    header: str
    description: str = ""

    def format(self) -> str:
        """Final commit text: header, blank line, description."""
        if not self.description:
            return self.header
        return f"{self.header}\n\n{self.description}"

    def render(self) -> str:
        """Marker form understood by parse_response()."""
        return f"{HEADER_MARKER} {self.header}\n{DESCRIPTION_MARKER} {self.description}\n"


def parse_response(text: str) -> CommitMessage:
    """Extract HEADER/DESCRIPTION fields from raw model output."""
    header = None
    description = None

    for line in text.split('\n'):
        line = line.strip()
        if header is None and line.startswith(HEADER_MARKER):
            header = line[len(HEADER_MARKER):].strip()
        elif description is None and line.startswith(DESCRIPTION_MARKER):
            description = line[len(DESCRIPTION_MARKER):].strip()

    if not header:
        raise NoHeaderFoundError("No header found in response")

    # TODO: re-prompt instead of cutting once the review loop can regenerate
    if len(header) > MAX_HEADER_LENGTH:
        header = header[:MAX_HEADER_LENGTH]

    return CommitMessage(header=header, description=description or "")


def parse_edited_message(text: str, fallback: CommitMessage) -> CommitMessage:
    """Parse an editor buffer, keeping fallback values for fields left empty.

    Lines starting with '#' are ignored. Every non-blank line after the
    DESCRIPTION marker continues the description.
    """
    header = ""
    description = ""
    extra_lines = []
    in_description = False

    for line in text.split('\n'):
        if line.strip().startswith('#'):
            continue
        if line.startswith(HEADER_MARKER):
            header = line[len(HEADER_MARKER):].strip()
            continue
        if line.startswith(DESCRIPTION_MARKER):
            description = line[len(DESCRIPTION_MARKER):].strip()
            in_description = True
            continue
        if in_description and line.strip():
            extra_lines.append(line.rstrip())

    if extra_lines:
        description = '\n'.join(([description] if description else []) + extra_lines)

    return CommitMessage(
        header=header[:MAX_HEADER_LENGTH] if header else fallback.header,
        description=description or fallback.description,
    )


def _envelope_message(envelope) -> str | None:
    """Pull error.message out of a decoded provider error envelope."""
    if not isinstance(envelope, dict):
        return None
    error = envelope.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
        return error["message"]
    return None


def error_from_response(label: str, status: int, body) -> RemoteAPIError:
    """Build the error for a non-2xx response.

    Uses the provider's own message when the body decodes as an error
    envelope, otherwise the raw status and body.
    """
    envelope = body
    if isinstance(body, (str, bytes)):
        try:
            envelope = json.loads(body)
        except ValueError:
            envelope = None

    error_cls = AuthError if status in (401, 403) else RemoteAPIError
    message = _envelope_message(envelope)
    if message:
        return error_cls(f"{label} API error: {message}", status=status, message=message)

    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    elif not isinstance(body, str):
        body = json.dumps(body)
    return error_cls(f"{label} API error: status {status} - {body}", status=status)


class LLMClient(ABC):
    """Abstract base for LLM clients.

    Subclasses declare their allow-list and default model, build the
    provider's request envelope and send it. Parsing and the debug dump on
    failure are shared.
    """

    LABEL = ""
    DEFAULT_MODEL = ""
    KNOWN_MODELS: tuple[str, ...] = ()

    def __init__(self, api_key: str | None, model: str | None = None,
                 timeout: float = DEFAULT_TIMEOUT, debug_dir: str | None = None):
        if not api_key:
            raise MissingAPIKeyError(f"{self.LABEL} API key is required")
        self.api_key = api_key
        self.model = self.resolve_model(model)
        self.timeout = timeout
        self.debug_dir = debug_dir or tempfile.gettempdir()

    @classmethod
    def is_known_model(cls, model: str) -> bool:
        return model in cls.KNOWN_MODELS

    @classmethod
    def resolve_model(cls, model: str | None) -> str:
        """Unknown or empty model names fall back to DEFAULT_MODEL."""
        if not model or not cls.is_known_model(model):
            if model:
                logger.warning("Unknown %s model %r, using %s", cls.LABEL, model, cls.DEFAULT_MODEL)
            return cls.DEFAULT_MODEL
        return model

    @property
    def name(self) -> str:
        return f"{self.LABEL} ({self.model})"

    @abstractmethod
    def build_payload(self, prompt: str) -> dict:
        pass

    @abstractmethod
    def _send(self, payload: dict) -> str:
        """Send the payload and return the completion text."""
        pass

    def generate(self, diff) -> CommitMessage:
        """Ask the provider for a commit message describing `diff`."""
        prompt = build_prompt(str(diff))
        payload = self.build_payload(prompt)
        logger.debug("Sending %d-char prompt to %s", len(prompt), self.name)

        try:
            text = self._send(payload)
        except (RemoteTransportError, RemoteAPIError, EmptyResponseError) as e:
            e.debug_path = self._dump_request(payload)
            raise

        logger.debug("Raw response from %s: %r", self.name, text)
        return parse_response(text)

    def _dump_request(self, payload: dict) -> str | None:
        """Write the outgoing payload (no headers, so no key) for troubleshooting."""
        path = os.path.join(self.debug_dir, DEBUG_FILENAME)
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(payload, f, indent=2)
        except OSError as e:
            logger.warning("Could not write debug request to %s: %s", path, e)
            return None
        logger.debug("Saved failed request to %s", path)
        return path

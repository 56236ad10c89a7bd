from __future__ import annotations

import json
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel


ChatRole = Literal["user", "model", "system"]


class ChatMessage(BaseModel):
    """A single conversational turn fed back to the model on every call.

    ``content`` is either plain text or the structured JSON value the model
    returned for that turn.
    """

    role: ChatRole
    content: Union[str, Dict[str, Any]]

    def content_text(self) -> str:
        """Render ``content`` as text for a chat-completion message."""
        if isinstance(self.content, str):
            return self.content
        return json.dumps(self.content)

"""LLM Request/Response Logger for setup runs.

This module provides a thread-safe, memory-based logging system for LLM interactions.
Calls are grouped by setup session (one per assistant instance) and stored in YAML format.
"""

import os
import yaml
from datetime import datetime
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict
from threading import Lock


@dataclass
class LLMRequest:
    """Represents an LLM request with all parameters."""
    messages: List[Dict[str, str]]
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def flatten(self) -> Dict[str, Any]:
        """Flatten the request into a dictionary for YAML storage."""
        result = {}
        for key, value in asdict(self).items():
            if value is not None:
                result[key] = value
        return result


@dataclass
class LLMResponse:
    """Represents an LLM response. ``outcome`` is one of text, empty or transport_failure."""
    content: Optional[str]
    outcome: str = "text"
    error: Optional[str] = None

    def flatten(self) -> Dict[str, Any]:
        """Flatten the response into a dictionary for YAML storage."""
        result: Dict[str, Any] = {"content": self.content, "outcome": self.outcome}
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass
class LLMCall:
    """Represents a single LLM call with request, response, and metadata."""
    action_name: str
    request: LLMRequest
    response: LLMResponse
    timestamp: datetime = field(default_factory=datetime.now)
    duration_ms: Optional[int] = None


@dataclass
class SessionLog:
    """Represents one setup session with all its LLM calls."""
    query: str
    agent_id: Optional[str] = None
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None
    llm_calls: List[LLMCall] = field(default_factory=list)


class LLMLogger:
    """Thread-safe LLM logger that stores logs in memory and persists to YAML files."""

    def __init__(self, log_directory: str = "logs"):
        self.log_directory = log_directory
        self._current_session: Optional[SessionLog] = None
        self._all_sessions: List[SessionLog] = []
        self._lock = Lock()

    def start_session(self, query: str, agent_id: Optional[str] = None) -> None:
        """Start a new setup session logging scope."""
        with self._lock:
            if self._current_session:
                self._current_session.completed_at = datetime.now()

            self._current_session = SessionLog(query=query, agent_id=agent_id)
            self._all_sessions.append(self._current_session)

    def log_llm_call(
        self,
        action_name: str,
        request: LLMRequest,
        response: LLMResponse,
        duration_ms: Optional[int] = None
    ) -> None:
        """Log an LLM call to the current session, opening an unnamed one if needed."""
        with self._lock:
            if not self._current_session:
                self._current_session = SessionLog(query="")
                self._all_sessions.append(self._current_session)

            call = LLMCall(
                action_name=action_name,
                request=request,
                response=response,
                duration_ms=duration_ms
            )
            self._current_session.llm_calls.append(call)

    def complete_session(self) -> None:
        """Mark the current session as completed."""
        with self._lock:
            if self._current_session:
                self._current_session.completed_at = datetime.now()
                self._current_session = None

    def dump_to_file(self, filename: Optional[str] = None) -> str:
        """Dump all logged sessions to a YAML file.

        Args:
            filename: Optional custom filename. If not provided, uses current datetime.

        Returns:
            The path to the created file.
        """
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"llm_log_{timestamp}.yaml"

        os.makedirs(self.log_directory, exist_ok=True)
        filepath = os.path.join(self.log_directory, filename)

        with self._lock:
            if self._current_session:
                self._current_session.completed_at = datetime.now()

            data = {
                "sessions": [
                    {
                        "query": session.query,
                        "agent_id": session.agent_id,
                        "started_at": session.started_at.isoformat(),
                        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
                        "llm_calls": [
                            {
                                "action_name": call.action_name,
                                "timestamp": call.timestamp.isoformat(),
                                "duration_ms": call.duration_ms,
                                "request": call.request.flatten(),
                                "response": call.response.flatten()
                            }
                            for call in session.llm_calls
                        ]
                    }
                    for session in self._all_sessions
                ]
            }

        with open(filepath, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        return filepath

    def clear_logs(self) -> None:
        """Clear all logged sessions from memory."""
        with self._lock:
            self._current_session = None
            self._all_sessions.clear()

    def get_current_session_summary(self) -> Optional[Dict[str, Any]]:
        """Get a summary of the current session."""
        with self._lock:
            if not self._current_session:
                return None

            return {
                "query": self._current_session.query,
                "started_at": self._current_session.started_at.isoformat(),
                "llm_calls_count": len(self._current_session.llm_calls),
                "actions_used": sorted(set(call.action_name for call in self._current_session.llm_calls))
            }


# Global logger instance - initialized by the CLI
_global_logger: Optional[LLMLogger] = None


def get_logger() -> Optional[LLMLogger]:
    """Get the global LLM logger instance."""
    return _global_logger


def initialize_llm_logger(log_directory: str = "logs") -> LLMLogger:
    """Initialize the global LLM logger."""
    global _global_logger
    _global_logger = LLMLogger(log_directory)
    return _global_logger


def reset_llm_logger() -> None:
    global _global_logger
    _global_logger = None


def log_llm_call(
    action_name: str,
    request: LLMRequest,
    response: LLMResponse,
    duration_ms: Optional[int] = None
) -> None:
    """Log an LLM call using the global logger."""
    logger = get_logger()
    if logger:
        logger.log_llm_call(action_name, request, response, duration_ms)

"""Knowledge-base chat agent."""

from assistant.core.agentic_system.agent.chat_agent import KnowledgeChatAgent

__all__ = ["KnowledgeChatAgent"]

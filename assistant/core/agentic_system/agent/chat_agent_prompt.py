"""
Knowledge chat agent system prompt.

Defines the prompt template for knowledge-base answers. When a diagram is
being generated alongside the answer, the agent is told so it can refer to
it instead of describing one in text.

Dependencies: langchain_core.prompts
System role: Prompt template for the chat agent
"""

from langchain_core.prompts import ChatPromptTemplate

SYSTEM_PROMPT = """You are a knowledgeable assistant for cloud and OS migration topics.

## Instructions
1. Prefer the provided knowledge-base context when answering
2. If the context doesn't contain enough information, say so and answer from general knowledge
3. Be concise but thorough in your explanations
4. Refer to the knowledge-base source labels when you rely on them

## Conversation History
If provided, recent conversation history shows context for the current question.
Use it to understand follow-up questions and avoid repeating yourself.

## Diagrams
{diagram_instruction}"""

DIAGRAM_INSTRUCTION = (
    "An architecture diagram is generated and shown next to your answer. "
    "Explain the architecture in text and mention that the diagram illustrates it; "
    "do not draw ASCII diagrams."
)
NO_DIAGRAM_INSTRUCTION = "No diagram accompanies this answer; answer in text only."

CHAT_AGENT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    ("human", """{chat_history}

Context:
{context}

Question: {question}"""),
])


def get_chat_prompt() -> ChatPromptTemplate:
    """Get the chat agent prompt template."""
    return CHAT_AGENT_PROMPT

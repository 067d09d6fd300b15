"""Agents package: all AI agent classes."""

from agents.base_agent import BaseAgent
from agents.writer_agent import WriterAgent
from agents.editor_agent import EditorAgent
from agents.metadata_agent import MetadataAgent

__all__ = [
    "BaseAgent",
    "WriterAgent",
    "EditorAgent",
    "MetadataAgent",
]

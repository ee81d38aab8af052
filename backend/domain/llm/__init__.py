"""
LLM clients used to answer benchmark questions
"""

from domain.llm.base import BaseLLMClient
from domain.llm.factory import create_llm_client, infer_provider
from domain.llm.prompts import build_rag_prompt

__all__ = [
    "BaseLLMClient",
    "create_llm_client",
    "infer_provider",
    "build_rag_prompt",
]

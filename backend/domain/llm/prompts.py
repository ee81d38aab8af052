"""
Prompt templates
"""

RAG_PROMPT_TEMPLATE = """You are an expert in building automation systems, HVAC, and the Xeto specification language. Answer the following question based on the provided context.

Context:
{context}

Question: {query}

Provide a concise and accurate answer based only on the information in the context."""


def build_rag_prompt(query: str, context: str) -> str:
    return RAG_PROMPT_TEMPLATE.format(context=context, query=query)

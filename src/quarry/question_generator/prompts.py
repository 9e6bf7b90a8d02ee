# src/quarry/question_generator/prompts.py
"""Prompt templates for interview question generation."""

LANGUAGE_NAMES = {
    "en": "English",
    "tr": "Turkish",
    "nl": "Dutch",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
}

QUESTION_SCHEMA = """[
  {{
    "question": "A clear, unambiguous interview question",
    "answer": "A thorough answer grounded in the document",
    "difficulty": "{difficulty}",
    "category": "Technical | Conceptual | Practical | Analytical | Behavioral",
    "cognitive_level": "Remember | Understand | Apply | Analyze | Evaluate | Create",
    "keywords": ["key", "terms"],
    "source_context": "Which section or concept of the document this comes from",
    "assessment_criteria": "What this question evaluates",
    "follow_up_potential": "Areas for deeper follow-up questions",
    "industry_relevance": "Real-world application context"
  }}
]"""

# Used with retrieved context (the RAG path).
RAG_PROMPT = """You are an expert interviewer who writes assessment questions from source material.

DOCUMENT:
- Filename: {filename}
- Length: {document_length} characters
- Context below was selected by semantic retrieval over overlapping chunks.

CONTEXT:
\"\"\"
{context}
\"\"\"

TASK:
Generate exactly {count} interview questions at {difficulty} difficulty.

Difficulty follows Bloom's taxonomy:
- easy: Remember, Understand
- medium: Apply, Analyze
- hard: Evaluate, Create

Mix question types roughly evenly: factual/definition, conceptual, practical
application, and critical thinking. Every question must be answerable from the
context, and every answer must rely only on the context.

{language_directive}

Return a JSON array in exactly this shape:
""" + QUESTION_SCHEMA + """

Return exactly {count} questions and ONLY the JSON array, no other text."""

# Used when retrieval is unavailable (the direct path).
DIRECT_PROMPT = """You are an expert at creating interview questions from document content.
Your goal is to prepare a candidate for their interview and tests.

Based on the following document content, create exactly {count} interview questions
with their answers, each at {difficulty} difficulty.

Document ({filename}):
\"\"\"
{context}
\"\"\"

Make sure to:
1. Create diverse questions covering different aspects of the content
2. Provide detailed, accurate answers
3. Keep questions relevant for interview preparation

{language_directive}

Return a JSON array in exactly this shape:
""" + QUESTION_SCHEMA + """

Return exactly {count} questions and ONLY the JSON array, no other text."""


def language_directive(language: str) -> str:
    """Instruction fixing the output language. Unknown codes are used verbatim."""
    name = LANGUAGE_NAMES.get(language.lower(), language)
    return (
        f"Write every question, answer and free-text field in {name}. "
        "Keep JSON keys and the difficulty/cognitive_level values in English."
    )

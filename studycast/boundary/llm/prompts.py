"""
Prompt templates for the study language model.

Summary, quiz and tutoring prompts as LangChain ChatPromptTemplates.
The quiz prompt pins the exact JSON shape the quiz schema validates.

Dependencies: langchain_core.prompts
System role: Prompt templates for language model calls
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

SUMMARY_SYSTEM_PROMPT = """You are an expert educational tutor. Create a comprehensive yet concise \
summary of the following academic content. Focus on key concepts, main ideas, and important \
details that would help a student understand and remember the material."""

SUMMARY_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SUMMARY_SYSTEM_PROMPT),
    ("human", "Please summarize this academic content:\n\n{content}"),
])

QUIZ_SYSTEM_PROMPT = """You are an educational quiz generator. Create {count} multiple-choice \
questions based on the provided content.

## Output Format
Return ONLY a valid JSON array, with no prose before or after it, in this exact format:
[{{"id": "1", "question": "Question text?", "options": ["A", "B", "C", "D"], \
"correct_answer": 0, "explanation": "Why this is correct"}}]

## Rules
- Every question has exactly 4 options
- correct_answer is the zero-based index of the correct option (0-3)
- Questions must be answerable from the content alone"""

QUIZ_PROMPT = ChatPromptTemplate.from_messages([
    ("system", QUIZ_SYSTEM_PROMPT),
    ("human", "Create a quiz from this content:\n\n{content}"),
])

TUTOR_SYSTEM_PROMPT = """You are an AI tutor helping students understand their academic \
materials. Use the following document content to answer questions accurately and helpfully.

## Document Content
{context}"""

TUTOR_PROMPT = ChatPromptTemplate.from_messages([
    ("system", TUTOR_SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
])

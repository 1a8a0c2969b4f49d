"""Studycast: study documents to summaries, narrations, quizzes and tutoring chat."""

__version__ = "0.1.0"

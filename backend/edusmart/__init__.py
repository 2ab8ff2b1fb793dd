"""
EduSmart AI gateway.

Forwards educational-content requests (assignments, answers, quizzes,
grammar fixes, tutor chat) to OpenRouter and returns JSON or a PDF.
"""

__version__ = "1.0.0"

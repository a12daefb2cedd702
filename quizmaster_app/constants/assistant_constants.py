"""Canned texts used by the quiz assistant."""

GREETING_TEMPLATE: str = (
    'Great job on completing "{title}"! You scored {score}/{total} ({percent}%). '
    "I'm here to help explain any questions you got wrong or provide additional insights. "
    "What would you like to know?"
)

ALL_CORRECT_MESSAGE: str = (
    "Actually, you got all questions correct! Perfect score! "
    "Is there any specific concept you'd like me to explain further?"
)
WRONG_COUNT_TEMPLATE: str = (
    "You got {count} question(s) wrong. Let me help explain them. "
    "The key concepts you might want to review are related to the fundamentals covered in this quiz. "
    "Would you like me to explain a specific question number?"
)

QUESTION_HEADER_TEMPLATE: str = 'Question {number}: "{prompt}"\n\nThe correct answer is: {correct}'
QUESTION_RIGHT_MESSAGE: str = "You got this one right! Great job understanding this concept."
QUESTION_WRONG_TEMPLATE: str = (
    "You selected: {selected}. The key thing to remember is that {correct} is correct "
    "because it represents the fundamental principle being tested."
)
QUESTION_UNANSWERED_MESSAGE: str = "There is no recorded answer of yours for this question."
QUESTION_FOLLOW_UP: str = "Would you like me to explain the reasoning behind this answer?"

EXPLAIN_MESSAGE: str = (
    "I'd be happy to explain! The concepts in this quiz are designed to test your understanding "
    "of the fundamentals. Each incorrect answer is a learning opportunity. The correct answers follow "
    "logical principles that, once understood, make similar questions much easier. "
    "What specific part would you like me to break down?"
)

IMPROVE_TEMPLATE: str = (
    "Based on your performance ({percent}%), here are some suggestions:\n\n"
    "{suggestions}\n\n"
    "Your current score shows {band} understanding. Keep practicing!"
)
IMPROVE_SUGGESTIONS: tuple[str, ...] = (
    "Review the concepts behind the questions you missed",
    "Practice similar problems to reinforce understanding",
    "Focus on the fundamental principles rather than memorizing answers",
    "Take your time to read each question carefully",
)

STUDY_MESSAGE: str = (
    "Here are some study recommendations:\n\n"
    "• Review the core concepts covered in this quiz\n"
    "• Practice with similar questions\n"
    "• Focus on understanding the 'why' behind correct answers\n"
    "• Create notes summarizing key concepts\n"
    "• Take quizzes regularly to reinforce learning\n\n"
    "Consistent practice is key to improvement!"
)

DEFAULT_MESSAGE: str = (
    "I'm here to help you understand the quiz better! You can ask me things like:\n\n"
    "• 'Why was question 3 wrong?'\n"
    "• 'Explain the correct answer for question 1'\n"
    "• 'How can I improve my score?'\n"
    "• 'What should I study next?'\n\n"
    "What would you like to know?"
)

QUICK_QUESTIONS: tuple[str, ...] = (
    "Why was this question wrong?",
    "Explain question 1",
    "How can I improve?",
    "What should I study next?",
)

RESULT_SUMMARY_MESSAGES: dict[str, str] = {
    "excellent": "Excellent work!",
    "good": "Good job! Keep practicing!",
    "developing": "Keep learning and try again!",
}

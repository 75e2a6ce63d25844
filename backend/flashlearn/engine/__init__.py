"""
Engine Module
Learning engines behind the quiz and the daily widget.

Available Engines:
- QuestionGenerator: proficiency-driven quiz questions and answer scoring
- DailyWidgetEngine: daily spotlight word, exclusion history and streaks
"""
from flashlearn.engine.base import BaseEngine
from flashlearn.engine.question_generator import QuestionGenerator, question_generator
from flashlearn.engine.daily_widget_engine import DailyWidgetEngine

__all__ = [
    "BaseEngine",
    "QuestionGenerator",
    "question_generator",
    "DailyWidgetEngine"
]

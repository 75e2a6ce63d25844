"""
Question Generator
Builds the adaptive quiz question for a flashcard.

Responsibilities:
- Map the user's proficiency score to an exercise shape
- Build multiple choice options with the smart distractor chain
- Validate answers for every question shape
- Apply the proficiency score update after an answer
"""
import random
import re

from flashlearn.config import Settings
from flashlearn.engine.base import BaseEngine
from flashlearn.models.flashcard import Flashcard, ProficiencyLevel, ProgressStatus
from flashlearn.models.quiz import (
    QuizMode,
    QuizQuestion,
    MultipleChoiceQuestion,
    ScrambleQuestion,
    ExactTypingQuestion,
    SentenceBuilderQuestion,
    ContextualGapFillQuestion,
    DictationQuestion
)
from flashlearn.services.cosmos_db_service import CosmosDBService
from flashlearn.utils.distractor_strategy import SmartDistractorGenerator, smart_distractor_generator
from flashlearn.utils.proficiency import next_proficiency_score


BLANK = "_______"


class QuestionGenerator(BaseEngine):
    """
    Question Generator - picks the exercise that fits the user's mastery.

    Sprint mode (by proficiency band):
    - NEW (0-2): multiple choice, recognition
    - FAMILIAR (3-5): scrambled letters, construction
    - MASTERED (6+): exact typing, total recall

    Drill mode picks a random skill exercise instead: contextual gap fill,
    sentence builder, or dictation when the card has audio.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        db_service: CosmosDBService | None = None,
        distractor_generator: SmartDistractorGenerator | None = None,
        rng=None
    ):
        super().__init__(settings=settings, db_service=db_service)
        self.rng = rng or random
        if distractor_generator is None:
            distractor_generator = SmartDistractorGenerator(rng=rng) if rng else smart_distractor_generator
        self.distractor_generator = distractor_generator

    @property
    def name(self) -> str:
        return "question_generator"

    @property
    def description(self) -> str:
        return "Maps proficiency to quiz questions and builds distractors"

    # ==================== GENERATION ====================

    def generate(
        self,
        flashcard: Flashcard,
        mastery_score: int,
        pool: list[Flashcard],
        mode: QuizMode = QuizMode.SPRINT
    ) -> QuizQuestion:
        """
        Generate the question for a flashcard. Never raises.

        Args:
            flashcard: Card being asked
            mastery_score: User's proficiency score on the card
            pool: Cards to draw distractors from
            mode: Sprint (by proficiency) or drill

        Returns:
            One QuizQuestion variant
        """
        if mode == QuizMode.DRILL:
            return self._generate_drill(flashcard, pool)

        level = ProficiencyLevel.from_score(mastery_score)
        self.log_debug(f"Generating {level.value} question", {"word": flashcard.word})

        if level == ProficiencyLevel.NEW:
            return self._multiple_choice(flashcard, pool)
        elif level == ProficiencyLevel.FAMILIAR:
            return self._scramble(flashcard)
        return ExactTypingQuestion(
            flashcard=flashcard,
            hint=flashcard.word[:1] or None
        )

    def _generate_drill(self, flashcard: Flashcard, pool: list[Flashcard]) -> QuizQuestion:
        choice = self.rng.randint(1, 3)
        if choice == 1:
            return self._gap_fill(flashcard, pool)
        elif choice == 2:
            return self._sentence_builder(flashcard)
        elif flashcard.pronunciation_url:
            return DictationQuestion(flashcard=flashcard, audio_url=flashcard.pronunciation_url)
        return self._gap_fill(flashcard, pool)

    def _options_with(self, flashcard: Flashcard, pool: list[Flashcard]) -> tuple[list[str], int]:
        """Shuffle the headword in with its distractors; index is the first match."""
        distractors = self.distractor_generator.get_distractors(
            flashcard, pool, self.settings.DISTRACTOR_COUNT
        )
        options = distractors + [flashcard.word]
        self.rng.shuffle(options)
        return options, options.index(flashcard.word)

    def _multiple_choice(self, flashcard: Flashcard, pool: list[Flashcard]) -> MultipleChoiceQuestion:
        options, correct_index = self._options_with(flashcard, pool)
        return MultipleChoiceQuestion(
            flashcard=flashcard,
            options=options,
            correct_index=correct_index
        )

    def _scramble(self, flashcard: Flashcard) -> ScrambleQuestion:
        letters = list(flashcard.word)
        self.rng.shuffle(letters)
        return ScrambleQuestion(flashcard=flashcard, letters=letters)

    def _gap_fill(self, flashcard: Flashcard, pool: list[Flashcard]) -> ContextualGapFillQuestion:
        sentence = flashcard.example_sentence
        if not sentence.strip():
            sentence = f"Definition: {flashcard.definition}\nWord: {BLANK}"
        if flashcard.word:
            sentence = re.sub(re.escape(flashcard.word), BLANK, sentence, flags=re.IGNORECASE)

        options, correct_index = self._options_with(flashcard, pool)
        return ContextualGapFillQuestion(
            flashcard=flashcard,
            sentence_with_blank=sentence,
            options=options,
            correct_index=correct_index
        )

    @staticmethod
    def _sentence_for(flashcard: Flashcard) -> str:
        return flashcard.example_sentence.strip() or f"{flashcard.word} is the answer."

    def _sentence_builder(self, flashcard: Flashcard) -> SentenceBuilderQuestion:
        sentence = self._sentence_for(flashcard)
        segments = sentence.split()
        self.rng.shuffle(segments)
        return SentenceBuilderQuestion(
            flashcard=flashcard,
            scrambled_segments=segments,
            correct_sentence=sentence
        )

    # ==================== ANSWERS ====================

    def bind_to_card(self, question: QuizQuestion, flashcard: Flashcard) -> QuizQuestion:
        """
        Rebuild a submitted question around the stored flashcard.

        The answer key comes from the stored card, never from the request:
        the headword, the stored example sentence for sentence builder, and
        the headword's position among the offered options.
        """
        update = {"flashcard": flashcard}
        if isinstance(question, SentenceBuilderQuestion):
            update["correct_sentence"] = self._sentence_for(flashcard)
        elif isinstance(question, MultipleChoiceQuestion):
            options = question.options
            update["correct_index"] = options.index(flashcard.word) if flashcard.word in options else -1
        elif isinstance(question, ContextualGapFillQuestion):
            matches = [
                i for i, option in enumerate(question.options)
                if option.lower() == flashcard.word.lower()
            ]
            # -1 marks every option wrong
            update["correct_index"] = matches[0] if matches else -1
        return question.model_copy(update=update)

    @staticmethod
    def check_answer(question: QuizQuestion, answer: str) -> bool:
        """Check if the user's answer is correct for the question shape."""
        if answer is None:
            return False

        word = question.flashcard.word
        if isinstance(question, MultipleChoiceQuestion):
            return answer == word
        if isinstance(question, (ScrambleQuestion, ExactTypingQuestion)):
            return answer.lower() == word.lower()
        if isinstance(question, ContextualGapFillQuestion):
            if not 0 <= question.correct_index < len(question.options):
                return False
            return answer.lower() == question.options[question.correct_index].lower()
        if isinstance(question, SentenceBuilderQuestion):
            return answer.strip().lower() == question.correct_sentence.strip().lower()
        if isinstance(question, DictationQuestion):
            return answer.strip().lower() == word.lower()
        return False

    async def get_mastery_score(self, user_id: str, flashcard_id: str) -> int:
        """Stored proficiency score, 0 when the user never practiced the card."""
        progress = await self.db_service.get_flashcard_progress(user_id, flashcard_id)
        if not progress:
            return 0
        return max(0, progress.get("proficiencyScore", 0))

    async def submit_answer(
        self,
        user_id: str,
        question: QuizQuestion,
        answer: str
    ) -> tuple[bool, int]:
        """
        Validate an answer and persist the new proficiency score.

        Returns:
            (is_correct, new_score)
        """
        flashcard_id = question.flashcard.id
        self.log_start("submit_answer", {"user_id": user_id, "flashcard_id": flashcard_id})

        is_correct = self.check_answer(question, answer)
        current_score = await self.get_mastery_score(user_id, flashcard_id)
        new_score = next_proficiency_score(current_score, is_correct)

        await self.db_service.update_flashcard_progress(user_id, flashcard_id, {
            "proficiencyScore": new_score,
            "status": ProgressStatus.from_score(new_score).value
        })

        self.log_complete("submit_answer", {"correct": is_correct, "score": new_score})
        return is_correct, new_score


# Singleton instance
question_generator = QuestionGenerator()

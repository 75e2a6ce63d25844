"""
Quiz API Endpoints
REST API for adaptive flashcard questions.
"""
from fastapi import APIRouter, HTTPException, Depends, status
from typing import Optional
import logging

from flashlearn.core.dependencies import get_current_user_id_optional
from flashlearn.engine.question_generator import question_generator
from flashlearn.models.flashcard import Flashcard, ProficiencyLevel, ProgressStatus
from flashlearn.schemas.quiz import (
    QuestionRequest,
    QuestionResponse,
    AnswerRequest,
    AnswerResponse
)
from flashlearn.services.cosmos_db_service import cosmos_db_service


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/question", response_model=QuestionResponse)
async def generate_question(
    request: QuestionRequest,
    user_id: Optional[str] = Depends(get_current_user_id_optional)
):
    """
    Generate a question for a flashcard.

    The exercise shape follows the proficiency score:
    - 0-2: multiple choice with smart distractors
    - 3-5: scrambled letters
    - 6+: exact typing

    Drill mode picks gap fill, sentence builder or dictation instead.
    Distractors are drawn from the flashcard's topic.
    """
    try:
        card_data = await cosmos_db_service.get_flashcard(request.flashcard_id)
        if not card_data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Flashcard {request.flashcard_id} not found"
            )
        flashcard = Flashcard.from_dict(card_data)

        if request.mastery_score is not None:
            mastery_score = request.mastery_score
        elif user_id:
            mastery_score = await question_generator.get_mastery_score(user_id, flashcard.id)
        else:
            mastery_score = 0

        pool = []
        if flashcard.topic_id:
            topic_cards = await cosmos_db_service.get_topic_flashcards(flashcard.topic_id)
            pool = [Flashcard.from_dict(data) for data in topic_cards]

        question = question_generator.generate(flashcard, mastery_score, pool, request.mode)

        return QuestionResponse(
            mode=request.mode,
            mastery_score=mastery_score,
            level=ProficiencyLevel.from_score(mastery_score),
            question=question
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating question: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error generating question: {str(e)}"
        )


@router.post("/answer", response_model=AnswerResponse)
async def submit_answer(
    request: AnswerRequest,
    user_id: Optional[str] = Depends(get_current_user_id_optional)
):
    """
    Submit an answer to a question.

    Correct answers add 1 to the proficiency score; wrong answers take 2
    (never below 0). Requires a signed-in user. The answer is checked
    against the stored flashcard, not the card echoed in the request.
    """
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign in to record answers",
            headers={"WWW-Authenticate": "Bearer"}
        )

    try:
        flashcard_id = request.question.flashcard.id
        card_data = await cosmos_db_service.get_flashcard(flashcard_id)
        if not card_data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Flashcard {flashcard_id} not found"
            )
        flashcard = Flashcard.from_dict(card_data)

        question = question_generator.bind_to_card(request.question, flashcard)
        is_correct, new_score = await question_generator.submit_answer(
            user_id, question, request.answer
        )

        return AnswerResponse(
            is_correct=is_correct,
            new_score=new_score,
            level=ProficiencyLevel.from_score(new_score),
            status=ProgressStatus.from_score(new_score),
            correct_answer=flashcard.word
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error submitting answer: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error submitting answer: {str(e)}"
        )

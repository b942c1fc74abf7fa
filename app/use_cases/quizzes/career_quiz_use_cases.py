import json
import logging
from datetime import datetime, timezone
from typing import Iterable
from app.domain.entities.answer import Answer
from app.domain.entities.quiz import QuizDefinition
from app.domain.entities.quiz_result import QuizResult
from app.domain.errors import ExternalServiceError, ValidationError
from app.domain.repositories_interfaces.quiz_result_repo import QuizResultRepoInterface
from app.domain.scoring.accumulator import resolve_option
from app.domain.scoring.catalog import CAREER_PROFILE, get_quiz
from app.domain.scoring.llm_output import merge_scores, parse_generated_profile, to_recommendations
from app.domain.scoring.ranker import rank_recommendations
from app.domain.services_interfaces.text_generation_service import TextGenerationServiceInterface
from app.use_cases.quizzes.quiz_use_cases import QuizUseCases, generate_result_id
from config.main_config import DEFAULT_TOP_N


logger = logging.getLogger('use_cases')

SYSTEM_PROMPT = ('You are a career counselor for Indian students. You always answer with a single JSON object '
                 'like this: {"profileAnalysis": {...}, "recommendations": [...]}')

PROMPT_TEMPLATE = '''
Based on the following quiz answers and profile analysis, recommend the top {top_n} most suitable career paths.

Profile Analysis (0-100):
{analysis}

Quiz Answers:
{answers}
{profile}
Answer with exactly one JSON object in the following format:
{{
  "profileAnalysis": {{{categories}}},
  "recommendations": [
    {{
      "title": "Career Title",
      "description": "Brief description of the career",
      "matchScore": 85,
      "salaryRange": "₹6-15 LPA",
      "marketDemand": "High",
      "workLifeBalance": "Good",
      "jobSecurity": "High",
      "category": "Technology",
      "icon": "💻"
    }}
  ]
}}

profileAnalysis must use only the keys listed above with integer values from 0 to 100.
Focus on Indian market careers with LPA salary ranges. Categories can be: Technology, Healthcare, Finance, Design, Business, Education.
'''


def build_prompt(quiz: QuizDefinition, answers: list[Answer], scores: dict[str, int],
                 top_n: int, profile_summary: str = None) -> str:
    questions = {question.id: question for question in quiz.questions}
    answered = []
    for answer in answers:
        question = questions[answer.question_id]
        answered.append({'question': question.text, 'answer': resolve_option(question, answer).text})
    return PROMPT_TEMPLATE.format(
        top_n=top_n,
        analysis="\n".join(f"- {category}: {score}%" for category, score in scores.items()),
        answers=json.dumps(answered, ensure_ascii=False, indent=2),
        profile=f"\nStudent profile:\n{profile_summary}\n" if profile_summary else "",
        categories=", ".join(f'"{category}": 0' for category in quiz.categories),
    )


class CareerQuizUseCases(QuizUseCases):
    def __init__(self, sql_repo: QuizResultRepoInterface, redis_repo: QuizResultRepoInterface,
                 text_generation_service: TextGenerationServiceInterface = None):
        super().__init__(sql_repo, redis_repo)
        self.text_generation_service = text_generation_service

    async def submit(self, user_id: str, answers: Iterable[Answer], top_n: int = DEFAULT_TOP_N,
                     profile_summary: str = None) -> QuizResult:
        """
        Scores the AI career quiz and stores the result.

        The engine always scores the answers first. When a text-generation service is
        configured, its output is validated and merged in: profile scores are averaged with
        the engine scores and its careers replace the fallback career table. Output that fails
        validation, or a failed call, is logged and the engine result is kept.

        :param user_id: Respondent.
        :param answers: Answers to the career_profile quiz.
        :param top_n: Number of careers to return.
        :param profile_summary: Optional free-text profile passed to the language model.
        :return: The stored QuizResult, source is "llm" when generated careers were used.
        """
        quiz = get_quiz(CAREER_PROFILE)
        answers = list(answers)
        evaluation = self.evaluate(CAREER_PROFILE, answers, top_n)
        normalized = evaluation.normalized_scores
        recommendations = evaluation.recommendations
        source = 'engine'

        if self.text_generation_service is not None:
            prompt = build_prompt(quiz, answers, normalized, top_n, profile_summary)
            try:
                text = await self.text_generation_service.generate(prompt, SYSTEM_PROMPT)
                generated = parse_generated_profile(text, quiz.categories)
            except (ExternalServiceError, ValidationError) as e:
                logger.warning(f"USING ENGINE RECOMMENDATIONS, GENERATED PROFILE REJECTED: {e}",
                               extra={'user': user_id})
            else:
                normalized = merge_scores(normalized, generated.profileAnalysis)
                if generated.recommendations:
                    recommendations = to_recommendations(generated.recommendations, top_n)
                    source = 'llm'
                else:
                    recommendations = rank_recommendations(normalized, quiz.metadata, top_n,
                                                           raw_scores=evaluation.raw_scores)

        result = QuizResult(
            id=generate_result_id(),
            user_id=user_id,
            quiz_type=CAREER_PROFILE,
            answers=answers,
            raw_scores=evaluation.raw_scores,
            normalized_scores=normalized,
            recommendations=recommendations,
            streams=[],
            source=source,
            created_at=datetime.now(timezone.utc),
        )
        await self.save(result)
        return result

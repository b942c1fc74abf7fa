from typing import Optional
from app.domain.entities.quiz_result import QuizResult
from abc import ABC, abstractmethod


class QuizResultRepoInterface(ABC):
    @abstractmethod
    async def get(self, result: QuizResult) -> Optional[QuizResult]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, result: QuizResult) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, result: QuizResult) -> None:
        raise NotImplementedError

    async def get_by_user(self, user_id: str) -> list[QuizResult]:
        raise NotImplementedError

# Repository service that contains all repositories for SQL, redis and external services.
class RepoService:
    def __init__(self, sql_team_repo, redis_team_repo, sql_quiz_result_repo, redis_quiz_result_repo,
                 aiohttp_service, llm_service, notifier):
        self.sql_team_repo = sql_team_repo
        self.redis_team_repo = redis_team_repo
        self.sql_quiz_result_repo = sql_quiz_result_repo
        self.redis_quiz_result_repo = redis_quiz_result_repo
        self.aiohttp_service = aiohttp_service
        self.llm_service = llm_service
        self.notifier = notifier

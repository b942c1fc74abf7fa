import aiomysql
from pymysql.constants import CLIENT


class MySQLPool:
    def __init__(self, host: str, port: int, user: str, password: str, db: str,
                 minsize: int = 1, maxsize: int = 10):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.db = db
        self.minsize = minsize
        self.maxsize = maxsize
        self.pool = None

    async def create_pool(self):
        self.pool = await aiomysql.create_pool(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            db=self.db,
            minsize=self.minsize,
            maxsize=self.maxsize,
            # Multi-statement writes open an explicit transaction with conn.begin()
            autocommit=True,
            # rowcount of an UPDATE is the number of matched rows, conditional updates rely on it
            client_flag=CLIENT.FOUND_ROWS,
        )

    async def close_pool(self):
        self.pool.close()
        await self.pool.wait_closed()
        self.pool = None

    def get_connection(self):
        # Used as `async with pool.get_connection() as conn`, the connection goes back to the pool on exit
        return self.pool.acquire()

import os

from dotenv import load_dotenv


load_dotenv()

API_TITLE = os.getenv("API_TITLE", "SIWATT Stats API")
JWT_SECRET = os.getenv("JWT_SECRET")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

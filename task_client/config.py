import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "http://localhost:5000/api"


@dataclass
class ClientConfig:
    api_url: str = DEFAULT_API_URL
    session_file: Path = Path.home() / ".task_client" / "session.json"
    timeout: float = 10.0

    @classmethod
    def from_env(cls):
        config = cls(api_url=os.environ.get("TASK_API_URL", DEFAULT_API_URL).rstrip("/"))
        if os.environ.get("TASK_CLIENT_SESSION_FILE"):
            config.session_file = Path(os.environ["TASK_CLIENT_SESSION_FILE"])
        if os.environ.get("TASK_API_TIMEOUT"):
            config.timeout = float(os.environ["TASK_API_TIMEOUT"])
        return config

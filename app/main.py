from fastapi import FastAPI
import logging

from app.api.routes import router
from app.core.game_state_text import RULES_TEXT
from app.infra.settings import load_dotenv_if_present, settings_from_env

load_dotenv_if_present()

app = FastAPI(title="vanishing-tic-tac-toe", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=settings_from_env().log_level)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "vanishing-tic-tac-toe", "version": "0.1.0", "rules": RULES_TEXT}

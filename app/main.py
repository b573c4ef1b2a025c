import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, PlainTextResponse

from .config import get_settings
from .fixed_answers import get_fixed_answers, match_fixed_answer
from .message_client import fetch_all_messages
from .models import AnswerResponse
from .searchers.keyword_substring import generic_answer

logger = logging.getLogger(__name__)

STATUS_BANNER = "QA Service running. Use GET /ask?q=..."
USAGE_MESSAGE = "Missing query parameter q (example: /ask?q=When+is+Layla+planning+her+trip+to+London)"

app = FastAPI(title="Member QA", default_response_class=ORJSONResponse)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
settings = get_settings()


@app.get("/", response_class=PlainTextResponse)
def index():
    return STATUS_BANNER


@app.get("/health")
def health():
    return {
        "status": "ok",
        "messages_api": settings.messages_api_base,
        "fixed_answers": len(get_fixed_answers()),
    }


@app.get("/ask", response_model=AnswerResponse)
async def ask(q: Optional[str] = Query(None, description="Question about a member")):
    if not q:
        return ORJSONResponse(status_code=400, content={"answer": USAGE_MESSAGE})

    # fixed answers never touch the archive
    fixed = match_fixed_answer(q)
    if fixed is not None:
        return AnswerResponse(answer=fixed)

    try:
        messages = await fetch_all_messages(settings)
        answer = generic_answer(q, messages)
    except Exception as e:
        logger.exception(f"Answering {q!r} failed: {e}")
        return ORJSONResponse(
            status_code=500,
            content={"answer": f"Server error: {str(e) or type(e).__name__}"},
        )
    return AnswerResponse(answer=answer)


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    logger.info("QA service listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)

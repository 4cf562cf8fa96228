import logging
from typing import Optional

import dns.exception
# FastAPI creates the app object and defines the routes
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from checker import CheckerError, CheckerHandle, ConsistencyScanner, NoCheckerLoaded
from reporting.assembler import Assemble
from reporting.recommendations import Recommendations
from zones import load_directories

from . import __version__
from .config import Settings, configure_logging

logger = logging.getLogger(__name__)


def _load(handle: CheckerHandle, settings: Settings) -> None:
    if not settings.dirs:
        raise HTTPException(status_code=400, detail="no zone directories configured (NS_CHECKER_DIRS)")
    try:
        store = load_directories(settings.dirs)
    except (OSError, dns.exception.DNSException) as e:
        raise HTTPException(status_code=400, detail=f"failed to load zones: {e}")
    # The new checker is complete before it becomes visible.
    handle.replace(store)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    handle = CheckerHandle()
    assembler = Assemble()

    app = FastAPI(title="NS Checker")
    app.state.settings = settings
    app.state.handle = handle

    # Load at startup when directories are configured; /reload retries later.
    if settings.dirs:
        try:
            _load(handle, settings)
        except HTTPException as e:
            logger.error("initial zone load failed: %s", e.detail)

    @app.get("/check")
    def check():
        try:
            generation, result = handle.run_versioned(lambda c: ConsistencyScanner(c).scan())
        except NoCheckerLoaded as e:
            raise HTTPException(status_code=503, detail=str(e))
        except CheckerError as e:
            raise HTTPException(
                status_code=422,
                detail={
                    "issue": e.issue,
                    "message": str(e),
                    "recommendation": Recommendations.recommend(e.issue),
                },
            )

        response = assembler.build(
            target=", ".join(settings.dirs),
            result=result,
            meta={"version": __version__, "generation": generation},
        )
        return JSONResponse(content=response)

    @app.get("/types")
    def types():
        try:
            checker = handle.current()
        except NoCheckerLoaded as e:
            raise HTTPException(status_code=503, detail=str(e))
        return {"types": checker.store.types_text(), "records": len(checker.store)}

    @app.post("/reload")
    def reload():
        _load(handle, settings)
        generation, records = handle.run_versioned(lambda c: len(c.store))
        return {"generation": generation, "records": records}

    return app


def _default_app() -> FastAPI:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)


app = _default_app()

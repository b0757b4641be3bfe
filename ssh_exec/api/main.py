"""
HTTP front end for ssh_exec.

    uvicorn ssh_exec.api.main:app --reload     # development
    ssh-exec-api                               # installed console script
"""
import logging

import uvicorn
from fastapi import FastAPI

import ssh_exec
from ssh_exec.api.routers import ssh
from ssh_exec.logger import config_logging_for_app

LOGGER = logging.getLogger(__name__)

app = FastAPI(
    title='ssh-exec API',
    version=ssh_exec.__version__,
    description="Run single commands on remote hosts over SSH",
)
app.include_router(ssh.router)


@app.get("/")
async def root():
    """Service name, version and where to find things"""
    return {
        "status": "success",
        "message": "ssh-exec API",
        "version": ssh_exec.__version__,
        "docs": app.docs_url,
        "endpoints": {"ssh": ssh.router.prefix},
    }


@app.get("/health")
async def health():
    return {"status": "success", "message": "API is healthy"}


def serve(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Console script: configure logging and run the app under uvicorn."""
    config_logging_for_app()
    LOGGER.info("Starting ssh-exec API server on %s:%s", host, port)
    uvicorn.run("ssh_exec.api.main:app", host=host, port=port, reload=reload, log_level="info")


if __name__ == "__main__":
    serve(reload=True)

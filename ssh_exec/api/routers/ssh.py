"""
SSH command execution endpoints
"""
import logging

from fastapi import APIRouter, HTTPException, status

from ssh_exec.api.models import ExecRequest
from ssh_exec.config import max_chars_from_env
from ssh_exec.errors import (
    AuthenticationError,
    CommandRejectedError,
    DecryptError,
    ExecutionError,
    SSHConnectionError,
    SSHTimeoutError,
)
from ssh_exec.models import ExecResult
from ssh_exec.utilities.ssh_command import exec_ssh_command

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/ssh", tags=["ssh"])


@router.get("/health")
async def health_check():
    """Test endpoint to verify API is working"""
    return {"status": "success", "message": "SSH exec endpoint is healthy"}


@router.post("/exec", response_model=ExecResult)
async def exec_command(body: ExecRequest):
    """
    Run one command on the host in the request body and return its output.
    """
    config = body.connection_config()
    try:
        max_chars = max_chars_from_env()
    except ValueError as e:
        LOGGER.error("Invalid server configuration: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Invalid server configuration: {e}",
        ) from e

    try:
        return await exec_ssh_command(config, body.command, timeout=body.timeout, max_chars=max_chars)
    except CommandRejectedError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (AuthenticationError, DecryptError) as e:
        LOGGER.warning("Credentials rejected for %s: %s", config.target, e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e)) from e
    except SSHTimeoutError as e:
        LOGGER.warning("Timed out on %s: %s", config.target, e)
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e)) from e
    except SSHConnectionError as e:
        LOGGER.warning("Could not reach %s: %s", config.target, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    except ExecutionError as e:
        LOGGER.exception("Command execution failed on %s", config.target)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e

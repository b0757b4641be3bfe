from typing import Optional

from pydantic import Field

from ssh_exec.models import SSHConfig


class ExecRequest(SSHConfig):
    '''connection settings plus the command to run'''
    command: str = Field(..., description="command passed verbatim to the remote shell")
    timeout: Optional[float] = Field(None, gt=0, description="seconds allowed for connect + run")

    def connection_config(self) -> SSHConfig:
        return SSHConfig.model_validate(self.model_dump(include=set(SSHConfig.model_fields)))

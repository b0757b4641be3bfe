from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SSHConfig(BaseModel):
    '''Connection settings for one SSH command execution.

    ``passphrase`` keeps the difference between "not given" (None) and an
    explicit empty string. Secrets are excluded from repr.
    '''
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host: str = Field(..., min_length=1, description="hostname or address of the remote host")
    port: int = Field(22, ge=1, le=65535, strict=True, description="TCP port of the SSH server")
    username: str = Field(..., min_length=1, description="account to authenticate as")
    private_key: Optional[str] = Field(
        None, alias='privateKey', repr=False, description="PEM or OpenSSH private key text, optionally encrypted"
    )
    passphrase: Optional[str] = Field(None, repr=False, description="decrypts private_key when it is encrypted")
    password: Optional[str] = Field(None, repr=False, description="account password, alternative to a key")

    @model_validator(mode='after')
    def _require_credential(self):
        if not self.private_key and not self.password:
            raise ValueError('SSHConfig requires a private_key or a password')
        return self

    @property
    def target(self) -> str:
        return f'{self.username}@{self.host}:{self.port}'


class TextContent(BaseModel):
    type: Literal['text'] = 'text'
    text: str


class ExecResult(BaseModel):
    '''Output of a remote command.

    content[0] is always stdout. A second entry holds stderr when the command
    wrote any.
    '''
    content: list[TextContent]
    exit_status: Optional[int] = None

    @classmethod
    def from_output(cls, stdout: str, stderr: str = '', exit_status: int | None = None) -> 'ExecResult':
        content = [TextContent(text=stdout)]
        if stderr:
            content.append(TextContent(text=stderr))
        return cls(content=content, exit_status=exit_status)

    @property
    def stdout(self) -> str:
        return self.content[0].text

    @property
    def stderr(self) -> str:
        return self.content[1].text if len(self.content) > 1 else ''

    def to_dict(self) -> dict:
        return self.model_dump()

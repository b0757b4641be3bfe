"""
FastAPI application for ssh-exec
"""
from ssh_exec.api.main import app, serve

__all__ = ['app', 'serve']

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI, Request, Response

from datashelf.core.config import APP_NAME


@dataclass(frozen=True)
class CorsPolicy:
    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization")
    powered_by: str = APP_NAME

    def headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.allow_origin,
            "Access-Control-Allow-Methods": ", ".join(self.allow_methods),
            "Access-Control-Allow-Headers": ", ".join(self.allow_headers),
            "X-Powered-By": self.powered_by,
        }

    @staticmethod
    def is_preflight(method: str) -> bool:
        return method.upper() == "OPTIONS"


def install_cors(app: FastAPI, policy: CorsPolicy) -> None:
    """Stamp the policy's headers on every response and answer preflights directly."""

    @app.middleware("http")
    async def apply_cors_policy(request: Request, call_next) -> Response:
        if policy.is_preflight(request.method):
            return Response(status_code=204, headers=policy.headers())
        response = await call_next(request)
        response.headers.update(policy.headers())
        return response

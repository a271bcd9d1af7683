from fastapi import Request, HTTPException, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse
from collections import defaultdict
import threading
import time

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

class RateLimiter:
    def __init__(self, rate: int, period: int, clock=time.monotonic):
        self.rate = rate  # Max requests
        self.period = period  # Time window in seconds
        self.clock = clock
        self.clients = defaultdict(list)
        self._lock = threading.Lock()

    def __call__(self, request: Request):
        client_ip = request.client.host if request.client else "unknown"
        now = self.clock()

        with self._lock:
            self._sweep(now)
            if len(self.clients[client_ip]) >= self.rate:
                raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=RATE_LIMIT_MESSAGE)
            self.clients[client_ip].append(now)

    def _sweep(self, now: float):
        # Drop clients with no requests left in the window.
        for ip in list(self.clients):
            recent = [t for t in self.clients[ip] if t > now - self.period]
            if recent:
                self.clients[ip] = recent
            else:
                del self.clients[ip]

class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: RateLimiter, path_prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if request.url.path.startswith(self.path_prefix):
            try:
                self.limiter(request)
            except HTTPException as e:
                return JSONResponse(status_code=e.status_code, content={"detail": e.detail})
        return await call_next(request)

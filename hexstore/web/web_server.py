import logging
import tempfile
import uvicorn
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response, PlainTextResponse, StreamingResponse
from starlette.routing import Route
from hexstore.store import CHUNK_SIZE
from hexstore.auth import AuthResult
from hexstore.runtime import RequestResult, RequestResultType, RequestRouter, auth_from_header

# HTTP API of the store, utilizing the Starlette framework (https://www.starlette.io/).
#
# GET /<hex>   returns the object with that digest, or the object a mutable link with that pointer points at
# PUT /<name>  stores the body; anonymous writes are addressed by digest, authenticated writes
#              also (re)link the pointer derived from the name and the caller's identity
#
# A PUT answers with the hex digest (anonymous) or the hex pointer (authenticated) as text/plain.

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    RequestResultType.Found: 200,
    RequestResultType.Changed: 200,
    RequestResultType.WriteError: 500,
    RequestResultType.AuthError: 403,
    RequestResultType.InputError: 400,
    RequestResultType.RecordError: 404,
}

_ALL_METHODS = ["GET", "HEAD", "PUT", "POST", "DELETE", "PATCH", "OPTIONS"]

class WebServer:
    __NAME_PARAM = "name"

    def __init__(self, router:RequestRouter):
        self.router = router
        self.server = None

    def app(self) -> Starlette:
        routes = [
            Route('/', self.get_root, methods=['GET']),
            Route(f"/{{{self.__NAME_PARAM}:path}}", self.handle_request, methods=_ALL_METHODS),
        ]
        return Starlette(routes=routes)

    async def run(self, host:str="0.0.0.0", port:int=8001):
        config = uvicorn.Config(app=self.app(), loop="asyncio", host=host, port=port, log_level="info")
        self.server = uvicorn.Server(config)
        await self.server.serve()

    def stop(self):
        if(self.server is not None):
            self.server.should_exit = True

    #=========================
    # Route handlers
    #=========================
    async def get_root(self, request:Request):
        return PlainTextResponse('hexstore')

    async def handle_request(self, request:Request):
        name = request.path_params[self.__NAME_PARAM]
        expected_size = self.__get_expected_size(request)
        #spool the body to disk, so auth and store can both read it without holding it in memory
        body = tempfile.TemporaryFile()
        try:
            async for chunk in request.stream():
                body.write(chunk)
            body.seek(0)
            result = await run_in_threadpool(self.__process, request.method, name, body, expected_size,
                                             request.headers.get('Authorization'))
        finally:
            body.close()
        logger.debug(f"{request.method} /{name} -> {result!r}")
        return self.__result_to_response(result)

    def __process(self, method:str, name:str, body, expected_size:int, auth_header:str|None) -> RequestResult:
        if method.upper() == "PUT":
            auth_spec = auth_from_header(auth_header, method)
            auth_result = self.router.authenticate(auth_spec, body)
        else:
            auth_result = AuthResult.anonymous()
        return self.router.process_method(method, name, body, expected_size, auth_result)

    def __get_expected_size(self, request:Request) -> int:
        content_length = request.headers.get('Content-Length')
        if content_length is None:
            return 0
        try:
            return max(int(content_length), 0)
        except ValueError:
            return 0

    def __result_to_response(self, result:RequestResult) -> Response:
        status_code = _STATUS_CODES.get(result.typ, 500)
        if result.v is not None:
            return PlainTextResponse(result.v, status_code=status_code)
        if result.f is not None:
            return StreamingResponse(_iter_file(result.f), status_code=status_code,
                                     media_type="application/octet-stream")
        return Response(status_code=status_code)

def _iter_file(f):
    try:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    finally:
        f.close()

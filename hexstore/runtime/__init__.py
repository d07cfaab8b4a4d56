from . router import RequestResult, RequestResultType, RequestRouter, auth_from_header

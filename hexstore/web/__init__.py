from . web_server import WebServer

import logging
import asyncio
import click
from dataclasses import dataclass
from hexstore.config import Settings
from hexstore.auth import AUTH_VERIFIERS, AUTH_PREFIX, create_auth_chain
from hexstore.crypto.did_key import create_did, fingerprint_from_public_key, public_key_from_private_key, sign_digest
from hexstore.store import hash_stream
from hexstore.store.stores.file import FileObjectStore
from hexstore.runtime import RequestRouter
from hexstore.web import WebServer

# Main CLI to run and use a store server.
# It utilizes the 'click' library.

logger = logging.getLogger(__name__)

@dataclass
class CliContext:
    verbose:bool
    settings:Settings

@click.group()
@click.pass_context
@click.option("--verbose", "-v", is_flag=True, help="Will print verbose messages.")
def cli(ctx:click.Context, verbose:bool):
    #print logs to console
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    ctx.obj = CliContext(
        verbose=verbose,
        settings=Settings.from_env(),
    )

#===========================================================
# 'serve' command
#===========================================================
@cli.command(context_settings={'show_default': True})
@click.pass_context
@click.option("--store-dir", "-d", required=False, default=None, help="Where to store the objects. Defaults to HEXSTORE_STORE_DIR or the current directory.")
@click.option("--host", required=False, default=None, help="Interface to listen on. Defaults to HEXSTORE_HOST or 0.0.0.0.")
@click.option("--port", "-p", required=False, default=None, type=int, help="Port to listen on. Defaults to HEXSTORE_PORT or 8001.")
@click.option("--auth", "-a", "auth_methods", required=False, multiple=True, type=click.Choice(list(AUTH_VERIFIERS)),
              help="Auth methods to accept, tried in the given order. Defaults to HEXSTORE_AUTH or mock.")
@click.option("--no-symlinks", is_flag=True, help="Keep mutable links as record files instead of symlinks.")
def serve(ctx:click.Context, store_dir:str|None, host:str|None, port:int|None, auth_methods:tuple[str], no_symlinks:bool):
    """Starts the store server."""
    settings:Settings = ctx.obj.settings
    if store_dir is not None:
        settings.store_dir = store_dir
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if len(auth_methods) > 0:
        settings.auth_methods = list(auth_methods)
    if no_symlinks:
        settings.use_symlinks = False

    web_server = create_web_server(settings)
    print(f"-> Starting store server on {settings.host}:{settings.port}, storing in {settings.store_dir}")
    asyncio.run(web_server.run(host=settings.host, port=settings.port))

def create_web_server(settings:Settings) -> WebServer:
    try:
        auth_chain = create_auth_chain(settings.auth_methods)
    except ValueError as e:
        raise click.ClickException(str(e))
    store = FileObjectStore(settings.store_dir, use_symlinks=settings.use_symlinks)
    logger.info(f"auth methods: {', '.join(settings.auth_methods) or 'none'}")
    return WebServer(RequestRouter(store, auth_chain))

#===========================================================
# 'keygen' command
#===========================================================
@cli.command()
def keygen():
    """Creates a new Ed25519 keypair for the ed25519 auth method."""
    did, public_key_bytes, private_key_bytes = create_did()
    click.echo(f"DID: {did}")
    click.echo(f"Public Key: {public_key_bytes.hex()}")
    # Danger: keep the private key to yourself
    click.echo(f"Private Key: {private_key_bytes.hex()}")

#===========================================================
# 'sign' command
#===========================================================
@cli.command()
@click.argument("file", type=click.File("rb"))
@click.option("--private-key", "-k", required=True, envvar="HEXSTORE_PRIVATE_KEY", help="Hex encoded Ed25519 private key.")
def sign(file, private_key:str):
    """Prints the Authorization header value for uploading FILE with the ed25519 auth method."""
    try:
        private_key_bytes = bytes.fromhex(private_key)
        public_key_bytes = public_key_from_private_key(private_key_bytes)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--private-key")
    digest, _ = hash_stream(file)
    signature = sign_digest(private_key_bytes, digest)
    fingerprint = fingerprint_from_public_key(public_key_bytes)
    click.echo(f"{AUTH_PREFIX} ed25519:{fingerprint}:{signature}")

if __name__ == '__main__':
    cli(None)

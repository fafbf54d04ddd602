import functools
import json
import signal
import sys
import threading

import click
import structlog
from eth_utils import encode_hex, is_address

from anvil_harness import __version__
from anvil_harness.constants import DEFAULT_HOST, DEFAULT_PORT
from anvil_harness.exceptions import AnvilRPCError, ConfigurationError, ProcessNotFound
from anvil_harness.node import Node, NodeState
from anvil_harness.rpc import AnvilClient
from anvil_harness.utils.configuration.nodes import NodeConfig
from anvil_harness.utils.logs import configure_logging

log = structlog.get_logger(__name__)

#: Seconds between checks for a pending shutdown request while the node runs.
SIGNAL_POLL_INTERVAL = 0.5


def logging_options(func):
    """Decorator for adding '--log-level', '--log-file' and '--log-json' to subcommands."""

    @click.option(
        "--log-level",
        default="INFO",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
        show_default=True,
    )
    @click.option("--log-file", type=click.Path(dir_okay=False), default=None)
    @click.option("--log-json", is_flag=True, default=False)
    @functools.wraps(func)
    def wrapper(*args, log_level, log_file, log_json, **kwargs):
        configure_logging(log_level, log_file=log_file, log_json=log_json)
        return func(*args, **kwargs)

    return wrapper


def exit_status(returncode):
    """Map a process return code to a shell exit status.

    Popen reports death by signal N as -N; shells report it as 128 + N.
    """
    if returncode is None or returncode == 0:
        return 1
    if returncode < 0:
        return 128 - returncode
    return returncode


def validate_address(ctx, param, value):
    if not is_address(value):
        raise click.BadParameter(f"{value!r} is not an address")
    return value


@click.group(context_settings={"max_content_width": 120})
@click.version_option(__version__)
def main():
    """Launch and administer local anvil nodes."""


@main.command(name="run")
@click.argument("config-file", type=click.Path(exists=True, dir_okay=False))
@logging_options
def run(config_file):
    """Start an anvil node as configured in CONFIG-FILE and wait for it to exit.

    SIGINT and SIGTERM stop the node. Exits with 0 if the node stopped cleanly
    and with anvil's exit code if it crashed, or 128 + N if signal N killed it.
    """
    try:
        config = NodeConfig.from_file(config_file)
    except ConfigurationError as e:
        raise click.BadParameter(str(e), param_hint="CONFIG-FILE")

    node = Node.from_config(config, stdout=None, stderr=None)
    stop_requested = threading.Event()

    def shutdown(signum, _frame):
        # Only flag the request: the handler may interrupt the main thread
        # while it holds the node's lock.
        log.info("Received signal, stopping node", signal=signal.Signals(signum).name)
        stop_requested.set()

    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)

    try:
        node.start()
    except OSError as e:
        click.secho(f"Could not start {config.executable}: {e}", fg="red", err=True)
        sys.exit(1)

    returncode = node.wait(SIGNAL_POLL_INTERVAL)
    while returncode is None:
        if stop_requested.is_set():
            try:
                node.stop()
            except ProcessNotFound:
                log.info("Node already exited", returncode=node.returncode)
            returncode = node.wait()
            break
        else:
            returncode = node.wait(SIGNAL_POLL_INTERVAL)

    log.info("Node finished", state=node.state.value, returncode=returncode)
    if node.state is NodeState.STOPPED:
        sys.exit(0)
    sys.exit(exit_status(returncode))


@main.group(name="rpc")
@click.option(
    "--rpc-url",
    default=f"http://{DEFAULT_HOST}:{DEFAULT_PORT}",
    envvar="ANVIL_RPC_URL",
    show_default=True,
    help="HTTP url or IPC socket path of the node.",
)
@click.pass_context
def rpc(ctx, rpc_url):
    """Send anvil_* admin requests to a running node."""
    try:
        ctx.obj = AnvilClient.from_url(rpc_url)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--rpc-url")


def rpc_command(name):
    """Register a subcommand of `rpc`, reporting node errors instead of tracebacks."""

    def decorator(func):
        @rpc.command(name=name)
        @logging_options
        @click.pass_obj
        @functools.wraps(func)
        def wrapper(client, *args, **kwargs):
            try:
                return func(client, *args, **kwargs)
            except AnvilRPCError as e:
                click.secho(str(e), fg="red", err=True)
                sys.exit(1)

        return wrapper

    return decorator


@rpc_command("set-balance")
@click.argument("address", callback=validate_address)
@click.argument("wei", type=int)
def set_balance(client, address, wei):
    """Set the balance of ADDRESS to WEI."""
    client.set_balance(address, wei)


@rpc_command("set-chain-id")
@click.argument("chain-id", type=int)
def set_chain_id(client, chain_id):
    client.set_chain_id(chain_id)


@rpc_command("reset")
@click.option("--fork-url", default="", help="Fork this endpoint instead of the original state.")
@click.option("--block-number", type=int, default=None, help="Block to fork at.")
def reset(client, fork_url, block_number):
    """Reset the node, optionally forking a remote chain."""
    if block_number is not None and not fork_url:
        raise click.UsageError("--block-number requires --fork-url")
    client.reset(fork_url, block_number)


@rpc_command("dump-state")
@click.argument("out-file", type=click.File("w"))
def dump_state(client, out_file):
    """Write the node state to OUT-FILE as a hex string."""
    out_file.write(encode_hex(client.dump_state()))


@rpc_command("load-state")
@click.argument("in-file", type=click.File("r"))
def load_state(client, in_file):
    """Load a state written by dump-state from IN-FILE."""
    client.load_state(in_file.read().strip())


@rpc_command("node-info")
def node_info(client):
    """Print the node's configuration as JSON."""
    click.echo(json.dumps(client.node_info().raw, indent=2, sort_keys=True))

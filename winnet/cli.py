import json
import sys
from functools import wraps

import click

from . import config
from .errors import WinNetError
from .logging_config import setup_logging
from . import network, smb
from .utils import CommandResult


# --- Helper Functions ---


def _echo_json(data):
    click.echo(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def _echo_result(result):
    """Print a command outcome: dry-run text, a CommandResult, or nothing."""
    if result is None:
        return
    if isinstance(result, CommandResult):
        if result.stdout.strip():
            click.echo(result.stdout.strip())
        if result.stderr.strip():
            click.echo(result.stderr.strip(), err=True)
        if result.error:
            click.echo(
                click.style(f"Command failed with exit code {result.exit_code}", fg="red"),
                err=True,
            )
            sys.exit(1)
        return
    click.echo(result)


def handle_errors(func):
    """Turn WinNet exceptions into a red message and exit status 1."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except WinNetError as e:
            click.echo(click.style(f"Error: {e}", fg="red"), err=True)
            sys.exit(1)

    return wrapper


# --- CLI Commands ---


class OrderedGroup(click.Group):
    """Custom Click group that preserves command order."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


@click.group(cls=OrderedGroup)
@click.option("--debug", is_flag=True, default=None, help="Enable verbose debug logging.")
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Print the commands that would run instead of running them.",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Path to the configuration file.",
)
@click.pass_context
def cli(ctx, debug, dry_run, config_file):
    """
    WinNet - Windows network administration from the command line.

    Wraps ping, ipconfig, netsh and net, and reads adapter, share and
    session information from WMI.
    """
    cfg = config.load_config(config_file)
    config.apply_config(cfg)
    settings = cfg.get("settings", {})

    if debug is None:
        debug = settings.get("debug", config.DEFAULT_DEBUG)
    if dry_run is None:
        dry_run = settings.get("dry_run", config.DEFAULT_DRY_RUN)

    setup_logging(debug=debug, force_reinit=True)
    ctx.obj = {"dry_run": dry_run}


# --- Network Commands ---


@cli.command()
@click.argument("host")
@handle_errors
def ping(host):
    """Check whether HOST answers ping."""
    if network.responds_host(host):
        click.echo(click.style(f"{host} responds", fg="green"))
    else:
        click.echo(click.style(f"{host} does not respond", fg="yellow"))
        sys.exit(1)


@cli.command()
@handle_errors
def ipconfig():
    """Open a window showing `ipconfig /all`."""
    network.show_ip_config_all()


@cli.command()
@click.option("--mac", "mac_address", help="Select one adapter by MAC address.")
@click.option("--include-virtual", is_flag=True, help="Include virtual adapters.")
@click.option("--exclude-wireless", is_flag=True, help="Exclude wireless adapters.")
@click.option("--connecting", is_flag=True, help="Only adapters with status 0-3.")
@click.option("--configs", is_flag=True, help="Show adapter configurations instead.")
@handle_errors
def adapters(mac_address, include_virtual, exclude_wireless, connecting, configs):
    """List physical network adapters as JSON."""
    if configs:
        _echo_json(
            network.get_adapters_confs(
                mac_address,
                excludes_virtual=not include_virtual,
                excludes_wireless=exclude_wireless,
            )
        )
        return

    _echo_json(
        network.get_adapters_props(
            mac_address,
            excludes_virtual=not include_virtual,
            excludes_wireless=exclude_wireless,
            is_connecting=True if connecting else None,
        )
    )


@cli.command("set-ip")
@click.argument("name")
@click.option("--ip", help="Static address. Omit to enable DHCP.")
@click.option("--mask", help=f"Subnet mask (default {config.DEFAULT_SUBNET_MASK}).")
@click.option("--gateway", help="Default gateway.")
@click.pass_context
@handle_errors
def set_ip(ctx, name, ip, mask, gateway):
    """Set the IP address of adapter NAME, or enable DHCP."""
    _echo_result(
        network.set_ip_address(name, ip, mask, gateway, dry_run=ctx.obj["dry_run"])
    )


@cli.command("set-dns")
@click.argument("name")
@click.argument("dns1", required=False)
@click.argument("dns2", required=False)
@click.pass_context
@handle_errors
def set_dns(ctx, name, dns1, dns2):
    """Set the DNS servers of adapter NAME. Without DNS1, use DHCP."""
    _echo_result(network.set_dns_servers(name, dns1, dns2, dry_run=ctx.obj["dry_run"]))


@cli.group()
def firewall():
    """Export or import the Windows firewall policy (admin rights required)."""


@firewall.command("export")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
@handle_errors
def firewall_export(ctx, path):
    """Export the firewall policy to PATH."""
    _echo_result(network.export_firewall_settings(path, dry_run=ctx.obj["dry_run"]))


@firewall.command("import")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
@handle_errors
def firewall_import(ctx, path):
    """Import the firewall policy from PATH."""
    _echo_result(network.import_firewall_settings(path, dry_run=ctx.obj["dry_run"]))


# --- SMB Commands ---


@cli.command()
@click.argument("name")
@click.argument("path", type=click.Path(file_okay=False))
@click.option("--user", "user_name", default="Everyone", show_default=True)
@click.option(
    "--grant",
    type=click.Choice(["READ", "CHANGE", "FULL"], case_sensitive=False),
    default="READ",
    show_default=True,
)
@click.option("--remark", default="", help="Share comment.")
@click.pass_context
@handle_errors
def share(ctx, name, path, user_name, grant, remark):
    """Share directory PATH as NAME (admin rights required)."""
    _echo_result(
        smb.share_directory(
            name, path, user_name, grant.upper(), remark, dry_run=ctx.obj["dry_run"]
        )
    )


@cli.command()
@click.argument("name")
@click.pass_context
@handle_errors
def unshare(ctx, name):
    """Delete the share NAME (admin rights required)."""
    _echo_result(smb.del_shared_directory(name, dry_run=ctx.obj["dry_run"]))


@cli.command()
@handle_errors
def shares():
    """List local shares as JSON."""
    _echo_json(smb.get_local_shares())


@cli.command()
@click.argument("host")
@click.option("--share", "share_name", help=f"Share name (default {smb.IPC}).")
@click.option("--domain")
@click.option("--user")
@click.option("--password", help="Prompted for when --user is given without it.")
@click.pass_context
@handle_errors
def connect(ctx, host, share_name, domain, user, password):
    """Make sure a session to HOST exists, reconnecting if needed."""
    if user and password is None and not ctx.obj["dry_run"]:
        password = click.prompt("Password", hide_input=True, default="", show_default=False)

    result = smb.connect_sync_surely(
        host, share_name, domain, user, password, dry_run=ctx.obj["dry_run"]
    )
    if result is None:
        click.echo(f"Already connected to {smb.remote_path(host, share_name)}")
        return
    _echo_result(result)


@cli.command()
@click.argument("host", required=False)
@click.option("--share", "share_name", help="Share name; omit to close all sessions to HOST.")
@click.pass_context
@handle_errors
def disconnect(ctx, host, share_name):
    """Close sessions to HOST, or every session when HOST is omitted."""
    _echo_result(smb.disconnect_sync(host, share_name, dry_run=ctx.obj["dry_run"]))


@cli.command()
@click.option("--match", "matched", help="Regular expression matched against the name.")
@handle_errors
def sessions(matched):
    """List active network connections as JSON."""
    _echo_json(smb.get_active_connections(matched))


if __name__ == "__main__":
    cli()

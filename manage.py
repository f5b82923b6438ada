#!/usr/bin/env python3
"""
Run and maintain a local Billventory server.

    python manage.py start               background server, pid in .billventory.pid
    python manage.py stop                SIGTERM, then SIGKILL after a grace period
    python manage.py restart
    python manage.py dev                 foreground server with auto-reload
    python manage.py status
    python manage.py migrate [--no-backup]
    python manage.py rebuild-inventory   replace stored inventory with the full replay
"""

import argparse
import asyncio
import os
import signal
import socket
import subprocess
import sys
import time
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent
PID_FILE = ROOT_DIR / ".billventory.pid"
APP_PATH = "billventory.api.main:app"
STOP_GRACE_SECONDS = 3.0


def _alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except OSError:
        return False
    return True


def running_pid() -> int | None:
    """Pid recorded by ``start`` if that process still exists; stale files are removed."""
    try:
        pid = int(PID_FILE.read_text().strip())
    except (OSError, ValueError):
        return None
    if _alive(pid):
        return pid
    PID_FILE.unlink(missing_ok=True)
    return None


def terminate(pid: int) -> bool:
    try:
        os.kill(pid, signal.SIGTERM)
    except OSError:
        return not _alive(pid)

    deadline = time.monotonic() + STOP_GRACE_SECONDS
    while _alive(pid):
        if time.monotonic() >= deadline:
            try:
                os.kill(pid, signal.SIGKILL)
            except OSError:
                pass
            time.sleep(0.2)
            break
        time.sleep(0.1)
    return not _alive(pid)


def port_in_use(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind(("127.0.0.1", port))
        except OSError:
            return True
    return False


def port_owner(port: int) -> int | None:
    """Pid listening on ``port`` according to lsof, when lsof is installed."""
    try:
        out = subprocess.run(
            ["lsof", "-ti", f"TCP:{port}", "-sTCP:LISTEN"],
            capture_output=True,
            text=True,
        ).stdout.split()
    except OSError:
        return None
    return int(out[0]) if out and out[0].isdigit() else None


def uvicorn_command(host: str, port: int, reload: bool = False) -> list[str]:
    # One worker only: the ledger write lock lives in the process
    command = [sys.executable, "-m", "uvicorn", APP_PATH, "--host", host, "--port", str(port)]
    return command + ["--reload"] if reload else command


def cmd_start(args: argparse.Namespace) -> None:
    pid = running_pid()
    if pid is not None:
        sys.exit(f"Already running as PID {pid}; use 'restart' or 'stop'.")
    if port_in_use(args.port):
        owner = port_owner(args.port)
        sys.exit(f"Port {args.port} is taken{f' by PID {owner}' if owner else ''}.")

    proc = subprocess.Popen(uvicorn_command(args.host, args.port), cwd=ROOT_DIR)
    PID_FILE.write_text(str(proc.pid))
    print(f"Started PID {proc.pid}: http://{args.host}:{args.port}/api")


def cmd_stop(args: argparse.Namespace) -> None:
    pid = running_pid() or port_owner(args.port)
    if pid is None:
        print("Not running.")
        return

    stopped = terminate(pid)
    PID_FILE.unlink(missing_ok=True)
    print(f"Stopped PID {pid}." if stopped else f"PID {pid} did not exit.")


def cmd_restart(args: argparse.Namespace) -> None:
    pid = running_pid()
    if pid is not None:
        terminate(pid)
        PID_FILE.unlink(missing_ok=True)
    cmd_start(args)


def cmd_dev(args: argparse.Namespace) -> None:
    try:
        subprocess.run(uvicorn_command(args.host, args.port, reload=True), cwd=ROOT_DIR)
    except KeyboardInterrupt:
        pass


def cmd_status(args: argparse.Namespace) -> None:
    pid = running_pid()
    if pid is not None:
        print(f"Running as PID {pid}.")
    elif port_in_use(args.port):
        owner = port_owner(args.port)
        print(f"No pid file, but port {args.port} is in use{f' by PID {owner}' if owner else ''}.")
    else:
        print("Not running.")


def cmd_migrate(args: argparse.Namespace) -> None:
    from billventory.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(initialize_database(create_backup_before=not args.no_backup))
    for result in results:
        outcome = "ok" if result.success else f"FAILED: {result.error}"
        print(f"v{result.version} {result.name} ({result.execution_time_ms}ms) {outcome}")
    if not results:
        print("Nothing to apply.")
    if not all(result.success for result in results):
        sys.exit(1)


def cmd_rebuild_inventory(args: argparse.Namespace) -> None:
    from billventory.application.use_cases import RebuildInventoryUseCase
    from billventory.config import configure_logging
    from billventory.infrastructure.storage.sqlite import close_pool
    from billventory.infrastructure.storage.sqlite.migrations import initialize_database

    async def rebuild():
        await initialize_database(create_backup_before=False)
        try:
            return await RebuildInventoryUseCase().execute()
        finally:
            await close_pool()

    configure_logging()
    items = asyncio.run(rebuild())
    for item in items:
        print(f"{item.name:<30} qty={item.quantity:g} avg_cost={item.average_cost:.2f}")
    print(f"{len(items)} item(s) rebuilt.")


COMMANDS = {
    "start": (cmd_start, "start the server in the background"),
    "stop": (cmd_stop, "stop the background server"),
    "restart": (cmd_restart, "stop, then start"),
    "dev": (cmd_dev, "run in the foreground with reload"),
    "status": (cmd_status, "report whether the server is up"),
    "migrate": (cmd_migrate, "apply pending database migrations"),
    "rebuild-inventory": (cmd_rebuild_inventory, "re-derive inventory from transactions"),
}
SERVER_COMMANDS = {"start", "stop", "restart", "dev", "status"}


def main() -> None:
    from billventory.config import get_settings

    api = get_settings().api
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name, (func, help_text) in COMMANDS.items():
        command = sub.add_parser(name, help=help_text)
        command.set_defaults(func=func)
        if name in SERVER_COMMANDS:
            command.add_argument("--host", default=api.host)
            command.add_argument("--port", type=int, default=api.port)
        if name == "migrate":
            command.add_argument("--no-backup", action="store_true")

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()

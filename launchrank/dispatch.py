import os
import re
import shutil
import subprocess
import sys
import threading
from collections.abc import Mapping
from dataclasses import dataclass

from launchrank.logging import get_logger
from launchrank.models import Entry

_logger = get_logger(__name__, component="dispatch")

_WINDOWS_PLACEHOLDER_RE = re.compile(r"%([^%\s]+)%")
_POSIX_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)\}|\$(\w+)")

# scheme of at least two characters, so drive letters like C: are not URIs
_URI_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]+:")


@dataclass(frozen=True)
class LaunchCommand:
    executable: str
    arguments: str | None
    shell: bool


def expand_environment(
    command: str,
    env: Mapping[str, str] | None = None,
    posix: bool | None = None,
) -> str:
    """Substitute environment placeholders; unknown names are left as written.

    `%NAME%` is always expanded (case-insensitive, as on Windows). `$NAME` and
    `${NAME}` are expanded only on POSIX hosts, so a literal `$` in a Windows
    command survives.
    """
    env = os.environ if env is None else env
    posix = os.name == "posix" if posix is None else posix
    lookup = {key.upper(): value for key, value in env.items()}

    def _replace(m: re.Match) -> str:
        name = next(group for group in m.groups() if group)
        value = env.get(name)
        if value is None:
            value = lookup.get(name.upper())
        return m.group(0) if value is None else value

    command = _WINDOWS_PLACEHOLDER_RE.sub(_replace, command)
    if posix:
        command = _POSIX_PLACEHOLDER_RE.sub(_replace, command)
    return command


def split_command(command: str) -> LaunchCommand:
    """Split on the first space into executable and a single argument string.

    A command without a space is shell-opened so URI schemes, file
    associations and shell built-ins resolve. Executable paths that contain
    spaces cannot be expressed in this format.
    """
    if " " not in command:
        return LaunchCommand(executable=command, arguments=None, shell=True)
    executable = command.split(" ", 1)[0]
    arguments = command[len(executable) :].lstrip()
    return LaunchCommand(executable=executable, arguments=arguments, shell=False)


def resolve_shell_target(target: str) -> list[str]:
    """Argv that opens `target` on a non-Windows desktop.

    URIs and existing paths go to the desktop opener; anything else must be a
    command on PATH. Raises FileNotFoundError when nothing can open it.
    """
    if _URI_RE.match(target) or os.path.exists(target):
        opener_name = "open" if sys.platform == "darwin" else "xdg-open"
        opener = shutil.which(opener_name)
        if opener is None:
            raise FileNotFoundError(f"{opener_name} not found, can't open {target!r}")
        return [opener, target]
    executable = shutil.which(target)
    if executable is None:
        raise FileNotFoundError(f"Command not found: {target!r}")
    return [executable]


def _reap(process: subprocess.Popen) -> None:
    threading.Thread(target=process.wait, name=f"reap-{process.pid}", daemon=True).start()


def launch(command: LaunchCommand) -> None:
    if command.shell:
        if sys.platform == "win32":
            # ShellExecute: raises OSError for unknown targets and schemes
            os.startfile(command.executable)
            return
        process = subprocess.Popen(resolve_shell_target(command.executable))
    else:
        args = [command.executable]
        if command.arguments:
            args.append(command.arguments)
        process = subprocess.Popen(args, shell=False)
    _reap(process)


class ActionDispatcher:
    def __init__(self, env: Mapping[str, str] | None = None):
        self.env = env

    def invoke(self, entry: Entry) -> bool:
        command = split_command(expand_environment(entry.command, self.env))
        try:
            launch(command)
        except (OSError, ValueError, subprocess.SubprocessError):
            _logger.error(
                "Can't open setting",
                entry=entry.name,
                command=entry.command,
                exc_info=True,
            )
            return False
        _logger.debug("Launched %s", entry.name, command=command.executable, shell=command.shell)
        return True

from __future__ import annotations
import os, platform, subprocess, threading
from typing import List, Optional

from plyer import notification

DEFAULT_TITLE = "coffee-time"


class NotificationSender:
    """
    Delivers one desktop notification. Implementations never raise.
    """
    def send(self, title: str, message: str) -> None:
        raise NotImplementedError


class NullSender(NotificationSender):
    def send(self, title: str, message: str) -> None:
        return None


class CommandSender(NotificationSender):
    """
    Launches an external command as a detached child and forgets about it.
    Finished children are reaped on the next send.
    """
    def __init__(self):
        self._children: List[subprocess.Popen] = []

    def command(self, title: str, message: str) -> List[str]:
        raise NotImplementedError

    def send(self, title: str, message: str) -> None:
        self._reap()
        try:
            child = subprocess.Popen(
                self.command(title, message),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, ValueError, subprocess.SubprocessError):
            # command missing or not executable: best-effort, ignore
            return
        self._children.append(child)

    def _reap(self) -> None:
        # exit status is irrelevant, poll() only collects finished children
        self._children = [c for c in self._children if c.poll() is None]


def _applescript_quote(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')

def _powershell_quote(text: str) -> str:
    return text.replace("'", "''")


class MacSender(CommandSender):
    def command(self, title: str, message: str) -> List[str]:
        script = (
            f'display notification "{_applescript_quote(message)}" '
            f'with title "{_applescript_quote(title)}"'
        )
        return ["osascript", "-e", script]


class LinuxSender(CommandSender):
    def command(self, title: str, message: str) -> List[str]:
        return ["notify-send", title, message]


class WindowsSender(CommandSender):
    def command(self, title: str, message: str) -> List[str]:
        title, message = _powershell_quote(title), _powershell_quote(message)
        script = (
            "Add-Type -AssemblyName System.Windows.Forms;"
            "$notify = New-Object System.Windows.Forms.NotifyIcon;"
            "$notify.Icon = [System.Drawing.SystemIcons]::Information;"
            "$notify.Visible = $true;"
            f"$notify.ShowBalloonTip(10000, '{title}', '{message}', "
            "[System.Windows.Forms.ToolTipIcon]::Info);"
        )
        return ["powershell.exe", "-NoProfile", "-Command", script]


class PlyerSender(NotificationSender):
    """
    Cross-platform desktop notification via plyer, on a daemon thread so a
    slow backend never holds up the caller.
    """
    def __init__(self, timeout: int = 8):
        self.timeout = timeout

    def _deliver(self, title: str, message: str) -> None:
        try:
            notification.notify(title=title, message=message, timeout=self.timeout)
        except Exception:
            pass

    def send(self, title: str, message: str) -> None:
        try:
            threading.Thread(target=self._deliver, args=(title, message), daemon=True).start()
        except RuntimeError:
            pass


SYSTEM_SENDERS = {
    "Darwin": MacSender,
    "Linux": LinuxSender,
    "Windows": WindowsSender,
}

def select_sender(backend: Optional[str] = None, system: Optional[str] = None) -> NotificationSender:
    """
    backend in {'system','plyer','none'}; defaults to $COFFEE_TIME_NOTIFIER.
    'system' picks the command for the host OS family, or a no-op elsewhere.
    """
    if backend is None:
        backend = os.environ.get("COFFEE_TIME_NOTIFIER", "system")
    backend = backend.strip().lower()
    if backend == "none":
        return NullSender()
    if backend == "plyer":
        return PlyerSender()
    system = platform.system() if system is None else system
    sender_cls = SYSTEM_SENDERS.get(system)
    return sender_cls() if sender_cls else NullSender()


class Notifier:
    def __init__(self, sender: Optional[NotificationSender] = None, title: str = DEFAULT_TITLE):
        self.sender = sender if sender is not None else select_sender()
        self.title = title

    def notify(self, message: str) -> None:
        try:
            self.sender.send(self.title, message)
        except Exception:
            # Best-effort: a broken sender must not reach the scheduling loop.
            pass

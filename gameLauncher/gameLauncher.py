"""
Launches the Go engine process the bot plays against, shuts it down,
and relaunches the bot itself after a full run of sessions.
"""

import os
import shutil
import subprocess
import sys
import time

import psutil


class GameLauncher:
    """
    Launches a GTP engine (GNU Go by default) with piped stdin/stdout.
    """

    def __init__(self, command=("gnugo", "--mode", "gtp"), delay=0.5):
        self.command = list(command)
        self.delay = delay

    def launchEngine(self):
        """
        Starts the engine and waits for it to come up.
        """
        executable = shutil.which(self.command[0])
        if executable is None:
            raise FileNotFoundError("Engine executable not found: " + self.command[0])

        print(f"[LAUNCH] Launching {' '.join(self.command)}...")
        process = subprocess.Popen(
            [executable] + self.command[1:],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            bufsize=1,
        )

        time.sleep(self.delay)
        if process.poll() is not None:
            raise RuntimeError(
                f"Engine exited during startup with code {process.returncode}"
            )
        print(f"[LAUNCH] Engine running (pid={process.pid}).")
        return process

    def closeEngine(self, process, timeout=3.0):
        """
        Terminates the engine and anything it spawned.
        """
        try:
            root = psutil.Process(process.pid)
            targets = root.children(recursive=True) + [root]
        except psutil.NoSuchProcess:
            return

        for target in targets:
            try:
                target.terminate()
            except psutil.NoSuchProcess:
                continue
        _, alive = psutil.wait_procs(targets, timeout=timeout)
        for target in alive:
            try:
                target.kill()
            except psutil.NoSuchProcess:
                continue
        print(f"[LAUNCH] Engine stopped (pid={process.pid}).")


def restartScript():
    """Replace this process with a fresh copy of itself, counters zeroed."""
    print("[LAUNCH] Relaunching...")
    sys.stdout.flush()
    os.execv(sys.executable, [sys.executable] + sys.argv)

#!/usr/bin/python3

import os
import subprocess

import requests

from catalog import BASE_URL, REQUEST_TIMEOUT
from out import log

CHUNK_SIZE = 1024 * 64
CONFIGURE_FLAGS = ["--enable-optimizations"]


class BuildError(Exception):
    def __init__(self, step, version, detail=""):
        self.step = step
        self.version = version
        self.detail = detail
        msg = f"Failed to {step} Python {version}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


def archive_url(version):
    return f"{BASE_URL}/{version}/Python-{version}.tgz"


def make_command():
    """make, with one job per core when the core count is known."""
    cores = os.cpu_count()
    if cores:
        return ["make", "-j", str(cores)]
    return ["make"]


def _run(step, version, cmd):
    log(f"[RUN] {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise BuildError(step, version, f"exited with code {e.returncode}") from e
    except OSError as e:
        raise BuildError(step, version, str(e)) from e


# -----------------------------
# Steps
# -----------------------------
def download(version, url, path):
    log(f"[INFO] Downloading {url}...")
    try:
        with requests.get(url, stream=True, timeout=REQUEST_TIMEOUT) as r:
            r.raise_for_status()
            with open(path, "wb") as f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except (requests.RequestException, OSError) as e:
        raise BuildError("download", version, str(e)) from e


def extract(version, archive, destination):
    log(f"[INFO] Extracting {archive}...")
    _run("extract", version, ["tar", "-xzf", archive, "-C", destination])


def build_python(version, destination):
    """
    Download, extract, configure, compile and install one Python version.

    The source tree is unpacked under destination as Python-<version> and
    doubles as the install prefix. Returns that directory. Raises BuildError
    on the first step that fails; nothing is cleaned up afterwards.
    """
    url = archive_url(version)
    archive = os.path.basename(url)
    output_dir = os.path.join(destination, archive[:-len(".tgz")])

    download(version, url, archive)
    extract(version, archive, destination)
    os.remove(archive)

    prefix = os.path.realpath(output_dir)
    prior_pwd = os.getcwd()
    try:
        os.chdir(output_dir)
    except OSError as e:
        raise BuildError("configure", version, str(e)) from e

    try:
        log(f"[INFO] Configuring Python {version}...")
        _run("configure", version, ["./configure", *CONFIGURE_FLAGS, f"--prefix={prefix}"])

        log(f"[INFO] Building Python {version}...")
        _run("build", version, make_command())

        log(f"[INFO] Installing Python {version}...")
        _run("install", version, ["make", "install"])
    finally:
        os.chdir(prior_pwd)

    log(f"[OK] Python {version} installed to {output_dir}")
    return output_dir

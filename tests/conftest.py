import gzip
from pathlib import Path

import httpx
import pytest

from yumreader.fetcher import CacheStore
from yumreader.settings import Settings

BASE_URL = "http://mirror.example.com/6.0/os/SRPMS"

REPOMD_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<repomd xmlns="http://linux.duke.edu/metadata/repo" xmlns:rpm="http://linux.duke.edu/metadata/rpm">
  <revision>1308257578</revision>
  <data type="filelists">
    <checksum type="sha256">aaa111</checksum>
    <location href="repodata/aaa111-filelists.xml.gz"/>
    <timestamp>1308257578</timestamp>
    <size>410</size>
    <open-size>1024</open-size>
  </data>
  <data type="primary">
    <checksum type="sha256">bbb222</checksum>
    <location href="repodata/bbb222-primary.xml.gz"/>
    <timestamp>1308257579</timestamp>
  </data>
  <data type="other">
    <checksum type="sha256">ccc333</checksum>
    <location href="repodata/ccc333-other.xml.gz"/>
  </data>
</repomd>
"""

PRIMARY_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<metadata xmlns="http://linux.duke.edu/metadata/common" xmlns:rpm="http://linux.duke.edu/metadata/rpm" packages="3">
<package type="rpm">
  <name>readline</name>
  <arch>src</arch>
  <version epoch="0" ver="6.0" rel="3.el6"/>
  <checksum type="sha256" pkgid="YES">0f1e2d</checksum>
  <summary>A library for editing typed command lines</summary>
  <description>The Readline library provides a set of functions
that allow users to edit command lines.</description>
  <packager>CentOS BuildSystem &lt;http://bugs.centos.org&gt;</packager>
  <url>http://cnswww.cns.cwru.edu/php/chet/readline/rltop.html</url>
  <location href="Packages/readline-6.0-3.el6.src.rpm"/>
  <format>
    <rpm:license>GPLv3+</rpm:license>
    <rpm:vendor>CentOS</rpm:vendor>
    <rpm:group>System Environment/Libraries</rpm:group>
    <rpm:sourcerpm/>
    <rpm:requires>
      <rpm:entry name="ncurses-devel"/>
      <rpm:entry name="texinfo" flags="GE" epoch="0" ver="4.7"/>
    </rpm:requires>
  </format>
</package>
<package type="rpm">
  <name>zlib</name>
  <arch>x86_64</arch>
  <version epoch="0" ver="1.2.3" rel="25.el6"/>
  <summary>The zlib compression and decompression library</summary>
  <location href="Packages/zlib-1.2.3-25.el6.x86_64.rpm"/>
  <format>
    <rpm:license>zlib and Boost</rpm:license>
    <rpm:sourcerpm>zlib-1.2.3-25.el6.src.rpm</rpm:sourcerpm>
  </format>
</package>
<package type="rpm">
  <name>bash</name>
  <arch>x86_64</arch>
  <version epoch="1" ver="4.1.2" rel="3.el6"/>
  <summary>The GNU Bourne Again shell</summary>
  <location href="Packages/bash-4.1.2-3.el6.x86_64.rpm"/>
  <format>
    <rpm:license>GPLv3+</rpm:license>
    <rpm:sourcerpm>bash-4.1.2-3.el6.src.rpm</rpm:sourcerpm>
    <rpm:provides>
      <rpm:entry name="bash" flags="EQ" epoch="1" ver="4.1.2" rel="3.el6"/>
      <rpm:entry name="/bin/sh"/>
    </rpm:provides>
    <rpm:requires>
      <rpm:entry name="libc.so.6()(64bit)"/>
      <rpm:entry name="libtinfo.so.5()(64bit)"/>
    </rpm:requires>
  </format>
</package>
</metadata>
"""

OTHER_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<otherdata xmlns="http://linux.duke.edu/metadata/other" packages="2">
<package pkgid="0f1e2d" name="readline" arch="src">
  <version epoch="0" ver="6.0" rel="3.el6"/>
  <changelog author="John Doe &lt;j@x.com&gt; - 2.3.4-1" date="1262347200">- Update to 2.3.4</changelog>
  <changelog author="Jane Roe &lt;jr@x.com&gt; - git20110101-2" date="1293883200">* Rebuild from git snapshot</changelog>
  <changelog author="Nobody &lt;n@x.com&gt;" date="not a date">Untagged entry</changelog>
</package>
<package pkgid="3c4b5a" name="zlib" arch="x86_64">
  <version epoch="0" ver="1.2.3" rel="25.el6"/>
</package>
</otherdata>
"""

FILELISTS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<filelists xmlns="http://linux.duke.edu/metadata/filelists" packages="1">
<package pkgid="9a8b7c" name="bash" arch="x86_64">
  <version epoch="1" ver="4.1.2" rel="3.el6"/>
  <file>/bin/bash</file>
  <file type="dir">/etc/skel</file>
  <file>/etc/skel/.bashrc</file>
</package>
</filelists>
"""


def repo_files() -> dict[str, bytes]:
    """Repository metadata files keyed by path relative to the repository base."""
    return {
        "repodata/repomd.xml": REPOMD_XML,
        "repodata/aaa111-filelists.xml.gz": gzip.compress(FILELISTS_XML),
        "repodata/bbb222-primary.xml.gz": gzip.compress(PRIMARY_XML),
        "repodata/ccc333-other.xml.gz": gzip.compress(OTHER_XML),
    }


class FakeMirror:
    """In-memory HTTP mirror serving a repository's metadata files."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.files = repo_files()
        self.requests: list[str] = []
        self.offline = False
        self.client = httpx.Client(transport=httpx.MockTransport(self.handler))

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        relative = url.removeprefix(f"{self.base_url}/")
        if relative in self.files:
            return httpx.Response(200, content=self.files[relative])
        return httpx.Response(404)


@pytest.fixture
def mirror():
    fake = FakeMirror()
    yield fake
    fake.client.close()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def settings(cache_dir: Path) -> Settings:
    return Settings(cache_path=cache_dir, cache_expire=3600, cache_enabled=True)


@pytest.fixture
def store(settings: Settings, mirror: FakeMirror) -> CacheStore:
    return CacheStore(settings, client=mirror.client)


@pytest.fixture
def uncached_store(cache_dir: Path, mirror: FakeMirror) -> CacheStore:
    return CacheStore(Settings(cache_path=cache_dir, cache_enabled=False), client=mirror.client)

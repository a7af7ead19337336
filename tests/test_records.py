import datetime
from io import BytesIO

import pytest

from yumreader.extractor import iter_record_fragments
from yumreader.models import ChangelogRecord, FileListRecord, PackageRecord

from .conftest import FILELISTS_XML, OTHER_XML, PRIMARY_XML


def _records(document: bytes, record_type):
    return [record_type(fragment) for fragment in iter_record_fragments(BytesIO(document))]


@pytest.fixture
def packages() -> list[PackageRecord]:
    return _records(PRIMARY_XML, PackageRecord)


def test_package_fields(packages: list[PackageRecord]) -> None:
    readline = packages[0]
    assert readline.name == "readline"
    assert readline.arch == "src"
    assert readline.epoch == "0"
    assert readline.version == "6.0"
    assert readline.release == "3.el6"
    assert readline.summary == "A library for editing typed command lines"
    assert readline.description.startswith("The Readline library provides")
    assert readline.url == "http://cnswww.cns.cwru.edu/php/chet/readline/rltop.html"
    assert readline.location == "Packages/readline-6.0-3.el6.src.rpm"
    assert readline.group == "System Environment/Libraries"
    assert readline.vendor == "CentOS"
    assert readline.license == "GPLv3+"
    assert readline.packager == "CentOS BuildSystem <http://bugs.centos.org>"
    assert readline.checksum == "0f1e2d"
    assert readline.src_rpm == ""
    assert readline.provides == []
    assert readline.requires == ["ncurses-devel", "texinfo"]


def test_package_capabilities_keep_document_order(packages: list[PackageRecord]) -> None:
    bash = packages[2]
    assert bash.provides == ["bash", "/bin/sh"]
    assert bash.requires == ["libc.so.6()(64bit)", "libtinfo.so.5()(64bit)"]


def test_missing_fields_are_empty(packages: list[PackageRecord]) -> None:
    zlib = packages[1]
    assert zlib.provides == []
    assert zlib.requires == []
    assert zlib.vendor == ""
    assert zlib.group == ""
    assert zlib.description == ""
    assert zlib.src_rpm == "zlib-1.2.3-25.el6.src.rpm"


def test_nevra(packages: list[PackageRecord]) -> None:
    assert packages[0].nevra == "readline-6.0-3.el6.src"
    assert packages[2].nevra == "bash-1:4.1.2-3.el6.x86_64"


def test_fields_are_computed_once(packages: list[PackageRecord]) -> None:
    record = packages[0]
    doc = record.doc
    assert record.name == "readline"
    assert record.doc is doc
    assert "name" in vars(record)


def test_unparseable_fragment_degrades_to_empty(caplog) -> None:
    record = PackageRecord(b"<package><name>broken")
    assert record.name == ""
    assert record.provides == []
    assert record.nevra == "--"
    assert any(r.levelname == "WARNING" and "Unparseable" in r.getMessage() for r in caplog.records)


def test_record_with_huge_text_node() -> None:
    # larger than libxml2's default 10MB text node limit
    description = b"x" * 10_000_001
    document = (
        b'<metadata xmlns="http://linux.duke.edu/metadata/common"><package><name>big</name>'
        b"<description>" + description + b"</description></package></metadata>"
    )
    (record,) = _records(document, PackageRecord)
    assert record.name == "big"
    assert len(record.description) == len(description)


def test_changelog_record() -> None:
    readline, zlib = _records(OTHER_XML, ChangelogRecord)
    assert (readline.name, readline.arch, readline.version, readline.release) == ("readline", "src", "6.0", "3.el6")

    first, second, third = readline.changelogs
    assert first.author == "John Doe <j@x.com> - 2.3.4-1"
    assert first.version == "2.3.4-1"
    assert first.date == datetime.datetime(2010, 1, 1, 12, 0, tzinfo=datetime.UTC)
    assert first.summary == "Update to 2.3.4"

    assert second.version == "git20110101-2"
    assert second.summary == "Rebuild from git snapshot"

    assert third.version is None
    assert third.date is None
    assert third.summary == "Untagged entry"

    assert zlib.changelogs == []


def test_filelist_record() -> None:
    (bash,) = _records(FILELISTS_XML, FileListRecord)
    assert bash.name == "bash"
    assert bash.version == "4.1.2"
    assert bash.files == ["/bin/bash", "/etc/skel", "/etc/skel/.bashrc"]
    assert bash.directories == ["/etc/skel"]

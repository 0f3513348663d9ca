from pathlib import Path
from unittest.mock import Mock

from monosplit.common.transaction import (
    DeleteFileOp,
    FileSystemAdapter,
    TransactionManager,
    WriteFileOp,
)


def test_transaction_add_ops():
    mock_fs = Mock(spec=FileSystemAdapter)
    tm = TransactionManager(Path("/tmp"), fs=mock_fs)

    tm.add_write("libs/a/README.md", "# a")
    tm.add_delete_file("commands/a/README.md")

    assert tm.preview() == [
        "[WRITE] libs/a/README.md",
        "[DELETE] commands/a/README.md",
    ]
    assert tm.pending_count == 2
    assert isinstance(tm._ops[0], WriteFileOp)
    assert isinstance(tm._ops[1], DeleteFileOp)


def test_transaction_commit_calls_fs_and_returns_touched():
    mock_fs = Mock(spec=FileSystemAdapter)
    root = Path("/root")
    tm = TransactionManager(root, fs=mock_fs)

    tm.add_write("new.json", "{}")
    tm.add_delete_file("old.json")

    touched = tm.commit()

    mock_fs.write_text.assert_called_once_with(root / "new.json", "{}")
    mock_fs.remove.assert_called_once_with(root / "old.json", stop_at=root)
    assert touched == [Path("new.json"), Path("old.json")]
    assert tm.pending_count == 0


def test_real_fs_delete_prunes_emptied_directories(tmp_path):
    victim = tmp_path / "commands" / "version" / "__tests__" / "a.test.js"
    victim.parent.mkdir(parents=True)
    victim.write_text("", encoding="utf-8")
    keeper = tmp_path / "commands" / "other.js"
    keeper.write_text("", encoding="utf-8")

    tm = TransactionManager(tmp_path)
    tm.add_delete_file("commands/version/__tests__/a.test.js")
    tm.add_write("libs/x.ts", "export {};\n")
    tm.commit()

    assert not (tmp_path / "commands" / "version").exists()
    assert keeper.exists()
    assert (tmp_path / "libs" / "x.ts").read_text(encoding="utf-8") == "export {};\n"

"""Tests for the command-line interface"""
import sys

import pytest

from conftest import local_branch_names
from worktreectl.cli import create_worktree_main, main
from worktreectl.config import ROOT_ENV_VAR


@pytest.fixture
def in_repo(git_repo, worktree_root, monkeypatch):
    """Run the CLI from inside git_repo with WORKTREE_ROOT pointing at the test root."""
    monkeypatch.chdir(git_repo.working_dir)
    monkeypatch.setenv(ROOT_ENV_VAR, str(worktree_root))
    return git_repo


class TestCreateCommand:
    """Test the create command."""

    def test_create_prints_only_the_path(self, in_repo, worktree_root, capsys):
        assert main(["create", "task1"]) == 0

        captured = capsys.readouterr()
        assert captured.out == f"{worktree_root / 'worktree_task1'}\n"
        assert "Info:" in captured.err
        assert (worktree_root / "worktree_task1").is_dir()

    def test_create_twice_fails(self, in_repo, capsys):
        assert main(["create", "task1"]) == 0
        branches = local_branch_names(in_repo)
        capsys.readouterr()

        assert main(["create", "task1"]) == 1

        captured = capsys.readouterr()
        assert "Error:" in captured.err
        assert "Path already exists" in captured.err
        assert captured.out == ""
        assert local_branch_names(in_repo) == branches

    def test_root_flag_beats_environment(self, in_repo, temp_dir, capsys):
        flag_root = temp_dir / "flag-root"
        assert main(["create", "task1", "--root", str(flag_root)]) == 0
        assert capsys.readouterr().out.strip() == str(flag_root / "worktree_task1")

    def test_prefix_options(self, in_repo, worktree_root, capsys):
        assert main(["create", "task1", "--dir-prefix", "wt-", "--branch-prefix", "bot/"]) == 0
        assert capsys.readouterr().out.strip() == str(worktree_root / "wt-task1")
        assert "bot/task1" in local_branch_names(in_repo)

    def test_symbol_only_name(self, in_repo, capsys):
        assert main(["create", "***"]) == 1
        assert "becomes empty" in capsys.readouterr().err

    def test_cd_file_receives_target(self, in_repo, worktree_root, temp_dir, capsys):
        cd_file = temp_dir / "cd-target"
        cd_file.write_text("")

        assert main(["--cd-file", str(cd_file), "create", "task1"]) == 0

        assert cd_file.read_text() == str(worktree_root / "worktree_task1")
        assert "Now in:" in capsys.readouterr().out

    def test_no_cd_with_cd_file(self, in_repo, worktree_root, temp_dir, capsys):
        cd_file = temp_dir / "cd-target"
        cd_file.write_text("")

        assert main(["--cd-file", str(cd_file), "create", "task1", "--no-cd"]) == 0

        captured = capsys.readouterr()
        assert cd_file.read_text() == ""
        assert captured.out == f"{worktree_root / 'worktree_task1'}\n"
        assert "Info:" in captured.err

    def test_backward_compatible_wrapper(self, in_repo, worktree_root, capsys):
        assert create_worktree_main(["task1", "--branch", "legacy/task1"]) == 0
        assert capsys.readouterr().out.strip() == str(worktree_root / "worktree_task1")
        assert "legacy/task1" in local_branch_names(in_repo)


class TestRemoveCommand:
    """Test the remove command."""

    def test_remove_keeps_branch(self, in_repo, worktree_root, capsys):
        main(["create", "task1"])
        capsys.readouterr()

        assert main(["remove", "task1"]) == 0

        out = capsys.readouterr().out
        assert "Worktree removed." in out
        assert "Branch kept" in out
        assert not (worktree_root / "worktree_task1").exists()
        assert "agent/task1" in local_branch_names(in_repo)

    def test_remove_and_delete_branch(self, in_repo):
        main(["create", "task1"])
        assert main(["remove", "task1", "--delete-branch"]) == 0
        assert "agent/task1" not in local_branch_names(in_repo)

    def test_remove_from_inside_the_worktree(self, in_repo, worktree_root, monkeypatch, capsys):
        main(["create", "task1"])
        monkeypatch.chdir(worktree_root / "worktree_task1")
        capsys.readouterr()

        assert main(["remove", "task1", "--delete-branch"]) == 0

        captured = capsys.readouterr()
        assert "Branch deleted: agent/task1" in captured.out
        assert "Error:" not in captured.err
        assert "agent/task1" not in local_branch_names(in_repo)

    def test_remove_missing(self, in_repo, capsys):
        assert main(["remove", "ghost"]) == 1
        assert "Worktree path not found" in capsys.readouterr().err

    def test_remove_with_branch_already_gone(self, in_repo, worktree_root, capsys):
        main(["create", "task1"])
        path = worktree_root / "worktree_task1"
        in_repo.git.execute(["git", "-C", str(path), "checkout", "--detach"])
        in_repo.git.branch("-D", "agent/task1")
        capsys.readouterr()

        assert main(["remove", "task1", "--delete-branch"]) == 0

        captured = capsys.readouterr()
        assert "Worktree removed." in captured.out
        assert "Warn:" in captured.err
        assert not path.exists()


class TestOtherCommands:
    """Test list, help, shell-init and argument errors."""

    def test_list(self, in_repo, capsys):
        main(["create", "task1"])
        capsys.readouterr()

        assert main(["list"]) == 0
        assert "agent/task1" in capsys.readouterr().out

    @pytest.mark.parametrize("argv", [[], ["help"]])
    def test_help(self, argv, capsys):
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "create" in out
        assert "remove" in out

    def test_shell_init(self, capsys):
        assert main(["shell-init", "--name", "wt"]) == 0
        out = capsys.readouterr().out
        assert "wt() {" in out
        assert "--cd-file" in out
        assert sys.executable in out

    def test_not_in_repository(self, temp_dir, monkeypatch, capsys):
        monkeypatch.chdir(temp_dir)
        assert main(["list"]) == 1
        assert "Not inside a Git repository" in capsys.readouterr().err

    @pytest.mark.parametrize("argv", [
        ["bogus"],
        ["create"],
        ["create", "x", "--unknown-flag"],
        ["create", "x", "--from", ""],
        ["create", "x", "--branch"],
        ["shell-init", "--name", "bad name"],
    ])
    def test_input_errors_exit_nonzero(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 2

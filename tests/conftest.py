"""Pytest fixtures for worktreectl tests"""
import tempfile
from pathlib import Path

import git
import pytest

from worktreectl.core import WorktreeController
from worktreectl.models.request import WorktreeRequest


def _configure_identity(repo):
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()


def _init_repo(repo_path: Path, branch: str = "main") -> git.Repo:
    repo_path.mkdir(parents=True)
    repo = git.Repo.init(repo_path)
    _configure_identity(repo)

    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    repo.git.branch("-M", branch)
    return repo


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with a single 'main' branch."""
    repo = _init_repo(temp_dir / "test_repo")
    yield repo
    repo.close()


@pytest.fixture
def git_repo_origin_master_only(temp_dir):
    """Repository whose only candidate base is the remote-tracking 'origin/master'."""
    repo = _init_repo(temp_dir / "remote_only_repo", branch="trunk")
    repo.git.update_ref("refs/remotes/origin/master", "HEAD")
    yield repo
    repo.close()


@pytest.fixture
def cloned_repo(git_repo, temp_dir):
    """Clone of git_repo, so 'origin' is a real (local) remote."""
    clone = git.Repo.clone_from(git_repo.working_dir, temp_dir / "clone")
    _configure_identity(clone)
    yield clone
    clone.close()


@pytest.fixture
def worktree_root(temp_dir):
    """Explicit root directory for created worktrees."""
    return temp_dir / "wt-root"


@pytest.fixture
def navigations():
    """Records paths passed to the controller's navigator."""
    return []


@pytest.fixture
def controller(git_repo):
    """Controller bound to git_repo that reports by value."""
    return WorktreeController(git_repo.working_dir)


@pytest.fixture
def make_request(worktree_root):
    """Build WorktreeRequests with the default prefixes and the test root."""
    def _make(task_name, **options):
        options.setdefault("root_path", str(worktree_root))
        options.setdefault("dir_prefix", "worktree_")
        options.setdefault("branch_prefix", "agent/")
        return WorktreeRequest(task_name=task_name, **options)

    return _make


def local_branch_names(repo):
    """Local branch names of ``repo``, read fresh from disk."""
    return {head.name for head in git.Repo(repo.working_dir).heads}


def commit_file(worktree_path, filename="work.txt", content="work\n", message="Work"):
    """Commit a new file inside a worktree."""
    wt_repo = git.Repo(worktree_path)
    (Path(worktree_path) / filename).write_text(content)
    wt_repo.git.add(filename)
    wt_repo.git.commit("-m", message)
    wt_repo.close()

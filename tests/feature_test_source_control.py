"""Feature tests for checking stamped files back into version control.

Covers server path resolution, the per-file checkout/check-in cycle and the
release of temporary resources on every exit path.
"""

import os
import stat
import sys
import tempfile
import unittest
from pathlib import Path

# Add the parent directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tests.test_decorators import feature_test
from tests.test_data_utils import test_data
from tests.fakes import RecordingVersionControlClient

from buildbump.config.check_in_settings import CheckInSettings
from buildbump.config.file_settings import FileNameSettings
from buildbump.config.mapping_settings import WorkspaceMapping
from buildbump.core.scm.committer import commit_rewritten_files, resolve_server_path
from buildbump.core.scm.scoped import temporary_file, temporary_workspace, working_folder_mapping
from buildbump.core.version.rewriter import rewrite_version_files
from buildbump.services.base import ServiceError


class TestResolveServerPath(unittest.TestCase):
    """Feature tests for resolve_server_path."""

    def setUp(self):
        """Use a real absolute root so the tests hold on any platform."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = os.path.join(self.temp_dir.name, "src")
        self.mappings = [
            WorkspaceMapping(local_root=self.root, server_root="$/Contoso/Main"),
            WorkspaceMapping(local_root=os.path.join(self.root, "Native"), server_root="$/Contoso/Native/Main/"),
        ]

    def tearDown(self):
        """Remove the scratch directory."""
        self.temp_dir.cleanup()

    @feature_test
    def test_simple_mapping(self):
        """A file below a mapped root maps below its server root."""
        local = os.path.join(self.root, "ProjectA", "Properties", "AssemblyInfo.cs")
        self.assertEqual(resolve_server_path(local, self.mappings), "$/Contoso/Main/ProjectA/Properties/AssemblyInfo.cs")

    @feature_test
    def test_most_specific_mapping_wins(self):
        """The longest matching local root is selected, whatever the mapping order."""
        local = os.path.join(self.root, "Native", "app.rc")
        self.assertEqual(resolve_server_path(local, self.mappings), "$/Contoso/Native/Main/app.rc")
        self.assertEqual(resolve_server_path(local, list(reversed(self.mappings))), "$/Contoso/Native/Main/app.rc")

    @feature_test
    def test_prefix_must_end_on_component_boundary(self):
        """A root does not match a sibling folder sharing its name as a prefix."""
        local = os.path.join(self.temp_dir.name, "src2", "SharedAssemblyInfo.cs")
        self.assertIsNone(resolve_server_path(local, self.mappings))

    @feature_test
    def test_unmapped_file(self):
        """No covering mapping yields None."""
        self.assertIsNone(resolve_server_path(os.path.join(self.temp_dir.name, "elsewhere.cs"), self.mappings))
        self.assertIsNone(resolve_server_path(os.path.join(self.root, "a.cs"), []))

    @feature_test
    def test_names_with_spaces(self):
        """Folder names with spaces are carried into the server path."""
        local = os.path.join(self.root, "ProjectB", "My Project", "AssemblyInfo.vb")
        self.assertEqual(resolve_server_path(local, self.mappings), "$/Contoso/Main/ProjectB/My Project/AssemblyInfo.vb")


class TestCommitRewrittenFiles(unittest.TestCase):
    """Feature tests for commit_rewritten_files."""

    def setUp(self):
        """Rewrite the standard tree and prepare a fake server and mappings."""
        self.scratch = tempfile.TemporaryDirectory()
        scratch = Path(self.scratch.name)
        self.tree = test_data.copy_source_tree("standard", scratch)
        self.temp = scratch / "temp"
        self.temp.mkdir()
        self.settings = CheckInSettings()
        self.mappings = [WorkspaceMapping(local_root=str(self.tree), server_root="$/Contoso/Main")]
        self.files = rewrite_version_files(self.tree, FileNameSettings().rewrite_patterns, "1.2.4.4")
        self.client = RecordingVersionControlClient(server_files={
            "$/Contoso/Main/SharedAssemblyInfo.cs": '[assembly: AssemblyVersion("1.2.3.4")]',
        })

    def tearDown(self):
        """Remove the scratch directory."""
        self.scratch.cleanup()

    def _commit(self, mappings=None):
        return commit_rewritten_files(self.client, self.files, "1.2.4.4",
                                      self.mappings if mappings is None else mappings,
                                      self.temp, self.settings)

    @feature_test
    def test_each_file_gets_its_own_cycle(self):
        """Every file is mapped, checked out, checked in and unmapped before the next one."""
        changesets = self._commit()

        self.assertEqual(changesets, [100, 101, 102, 103])
        per_file = ["map_folder", "get_and_checkout", "check_in_pending", "unmap_folder"]
        self.assertEqual(self.client.operations(),
                         ["create_workspace"] + per_file * 4 + ["delete_workspace"])

    @feature_test
    def test_server_receives_rewritten_content(self):
        """The server copy ends up with exactly the locally rewritten content."""
        self._commit()
        for rewritten in self.files:
            server_path = resolve_server_path(rewritten.path, self.mappings)
            self.assertEqual(self.client.server_files[server_path], rewritten.content)
        self.assertIn('"1.2.4.4"', self.client.server_files["$/Contoso/Main/SharedAssemblyInfo.cs"])

    @feature_test
    def test_temp_files_and_workspace_are_released(self):
        """No temporary file, mapping or workspace is left behind."""
        self._commit()
        self.assertEqual(list(self.temp.iterdir()), [])
        self.assertEqual(self.client.workspaces, {})

    @feature_test
    def test_temp_path_is_temp_dir_plus_file_name(self):
        """Files are mapped to the temp directory under their own name."""
        self._commit()
        mapped = [call[3] for call in self.client.calls if call[0] == "map_folder"]
        self.assertEqual(mapped[0], str(self.temp / "SharedAssemblyInfo.cs"))
        self.assertEqual(mapped[3], str(self.temp / "app.rc"))

    @feature_test
    def test_comment_names_version(self):
        """The changeset comment is the template with the new version filled in."""
        self._commit()
        comments = {comment for _, comment, _ in self.client.changesets}
        self.assertEqual(comments, {"***NO_CI*** Version number updated to 1.2.4.4 by build server"})

    @feature_test
    def test_unmapped_files_are_skipped_with_warning(self):
        """Files outside every mapping are skipped and the rest are still checked in."""
        mappings = [WorkspaceMapping(local_root=str(self.tree / "Native"), server_root="$/Contoso/Native")]
        with self.assertLogs("buildbump.SourceControlCommitter", level="WARNING") as logs:
            changesets = self._commit(mappings)

        self.assertEqual(len(changesets), 1)
        self.assertEqual(len(logs.records), 3)
        self.assertIn("$/Contoso/Native/app.rc", self.client.server_files)

    @feature_test
    def test_nothing_to_commit(self):
        """An empty file list does not even create a workspace."""
        self.files = []
        self.assertEqual(self._commit(), [])
        self.assertEqual(self.client.calls, [])

    @feature_test
    def test_failure_releases_everything(self):
        """A failing check-in propagates after the mapping, temp file and workspace are released."""
        self.client.fail_on = {"check_in_pending"}
        with self.assertRaises(ServiceError):
            self._commit()

        self.assertEqual(self.client.operations(), [
            "create_workspace", "map_folder", "get_and_checkout", "check_in_pending",
            "unmap_folder", "delete_workspace",
        ])
        self.assertEqual(list(self.temp.iterdir()), [])

    @feature_test
    def test_release_failure_does_not_mask_original_error(self):
        """When releasing also fails, the original error is the one raised."""
        self.client.fail_on = {"check_in_pending", "unmap_folder"}
        with self.assertLogs("buildbump.ScopedResources", level="ERROR"):
            with self.assertRaises(ServiceError) as context:
                self._commit()

        self.assertEqual(str(context.exception), "check_in_pending failed")
        self.assertEqual(self.client.operations()[-1], "delete_workspace")


class TestScopedResources(unittest.TestCase):
    """Feature tests for the scoped temporary resources."""

    def setUp(self):
        """Create a scratch directory and a fake client."""
        self.scratch = tempfile.TemporaryDirectory()
        self.client = RecordingVersionControlClient()

    def tearDown(self):
        """Remove the scratch directory."""
        self.scratch.cleanup()

    @feature_test
    def test_workspace_name_is_unique_and_prefixed(self):
        """Each temporary workspace gets a fresh name with the configured prefix."""
        with temporary_workspace(self.client, "stamp") as first:
            pass
        with temporary_workspace(self.client, "stamp") as second:
            pass
        self.assertTrue(first.startswith("stamp_"))
        self.assertNotEqual(first, second)

    @feature_test
    def test_workspace_deleted_on_error(self):
        """The workspace is deleted when the block raises."""
        with self.assertRaises(RuntimeError):
            with temporary_workspace(self.client, "stamp") as workspace:
                raise RuntimeError("boom")
        self.assertEqual(self.client.calls[-1], ("delete_workspace", workspace))

    @feature_test
    def test_mapping_removed_on_error(self):
        """The working-folder mapping is removed when the block raises."""
        workspace = self.client.create_workspace("ws")
        with self.assertRaises(RuntimeError):
            with working_folder_mapping(self.client, workspace, "$/A/b.cs", "/tmp/b.cs"):
                raise RuntimeError("boom")
        self.assertEqual(self.client.workspaces[workspace], {})

    @feature_test
    def test_read_only_temp_file_deleted(self):
        """A read-only temporary file is made writable and deleted."""
        path = Path(self.scratch.name) / "AssemblyInfo.cs"
        with temporary_file(path):
            path.write_text("x")
            os.chmod(path, stat.S_IREAD)
        self.assertFalse(path.exists())

    @feature_test
    def test_missing_temp_file_is_fine(self):
        """Leaving the block without a file having been created is not an error."""
        path = Path(self.scratch.name) / "never-created.cs"
        with temporary_file(path):
            pass
        self.assertFalse(path.exists())


def run_source_control_feature_tests():
    """Run all source control feature tests.

    Returns:
        bool: True if all tests passed, False otherwise.
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTests(loader.loadTestsFromTestCase(TestResolveServerPath))
    suite.addTests(loader.loadTestsFromTestCase(TestCommitRewrittenFiles))
    suite.addTests(loader.loadTestsFromTestCase(TestScopedResources))
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_source_control_feature_tests()
    sys.exit(0 if success else 1)

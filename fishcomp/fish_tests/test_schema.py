"""
Unit tests for cli/schema.py module.

Tests flag sets, tree construction, and the flag views of a command.
"""

import unittest

from ..common import FishcompException
from ..cli.schema import MAX_COMMAND_DEPTH, CLISchema, Command, Flag, FlagSet, FlagType


class TestFlag(unittest.TestCase):
    """Tests for Flag."""

    def test_takes_value(self):
        """Only bool and count flags take no value."""
        self.assertFalse(Flag(name="a", type=FlagType.BOOL).takes_value())
        self.assertFalse(Flag(name="a", type=FlagType.COUNT).takes_value())
        self.assertTrue(Flag(name="a", type=FlagType.STRING).takes_value())
        self.assertTrue(Flag(name="a", type=FlagType.STRING_LIST).takes_value())

    def test_is_completable(self):
        """Hidden or deprecated flags are not completable."""
        self.assertTrue(Flag(name="a").is_completable())
        self.assertFalse(Flag(name="a", hidden=True).is_completable())
        self.assertFalse(Flag(name="a", deprecated="use --b").is_completable())

    def test_get_flags(self):
        """Short form comes first."""
        self.assertEqual(Flag(name="output", short="o").get_flags(), ["-o", "--output"])
        self.assertEqual(Flag(name="dry-run").get_flags(), ["--dry-run"])
        self.assertEqual(Flag(name="dry-run").get_dest(), "dry_run")

    def test_invalid_names_raise(self):
        """Names with whitespace or dashes and multi-character shorts are rejected."""
        for kwargs in ({"name": ""}, {"name": "two words"}, {"name": "--output"},
                       {"name": "output", "short": "oo"}, {"name": "output", "short": ""}):
            with self.assertRaises(FishcompException):
                Flag(**kwargs)


class TestFlagSet(unittest.TestCase):
    """Tests for FlagSet."""

    def test_sorted_iteration(self):
        """Sorted flag sets visit flags by name."""
        flags = FlagSet([Flag(name="zeta"), Flag(name="alpha")])
        self.assertEqual(flags.names(), ["alpha", "zeta"])

    def test_insertion_iteration(self):
        """Unsorted flag sets keep insertion order."""
        flags = FlagSet([Flag(name="zeta"), Flag(name="alpha")], sort_flags=False)
        self.assertEqual(flags.names(), ["zeta", "alpha"])

    def test_duplicate_name_raises(self):
        """Flag names are unique within a set."""
        flags = FlagSet([Flag(name="output")])
        with self.assertRaises(FishcompException):
            flags.add(Flag(name="output"))

    def test_duplicate_short_raises(self):
        """Shorthands are unique within a set."""
        flags = FlagSet([Flag(name="output", short="o")])
        with self.assertRaises(FishcompException):
            flags.add(Flag(name="other", short="o"))

    def test_lookup(self):
        """Flags can be found by name or shorthand."""
        output = Flag(name="output", short="o")
        flags = FlagSet([output])

        self.assertIn("output", flags)
        self.assertIs(flags.lookup("output"), output)
        self.assertIs(flags.lookup_short("o"), output)
        self.assertIsNone(flags.lookup("missing"))
        self.assertEqual(len(flags), 1)


class TestCommandTree(unittest.TestCase):
    """Tests for building and querying command trees."""

    def test_subcommands_get_parent(self):
        """Subcommands passed at construction point back to their parent."""
        child = Command(name="child")
        root = Command(name="app", subcommands=[child])

        self.assertIs(child.parent, root)
        self.assertIs(child.root(), root)
        self.assertTrue(root.is_root())
        self.assertFalse(child.is_root())

    def test_add_command_keeps_order(self):
        """add_command appends in the given order."""
        root = Command(name="app")
        root.add_command(Command(name="b"), Command(name="a"))
        self.assertEqual([cmd.name for cmd in root.subcommands], ["b", "a"])

    def test_duplicate_subcommand_raises(self):
        """Sibling names and aliases may not collide."""
        root = Command(name="app", subcommands=[Command(name="build", aliases=["b"])])

        with self.assertRaises(FishcompException):
            root.add_command(Command(name="build"))
        with self.assertRaises(FishcompException) as ctx:
            root.add_command(Command(name="bench", aliases=["b"]))

        self.assertIn("'app' already has a subcommand named 'b'", str(ctx.exception))

    def test_reattach_raises(self):
        """A command belongs to a single parent."""
        child = Command(name="child")
        Command(name="app", subcommands=[child])

        with self.assertRaises(FishcompException):
            Command(name="other", subcommands=[child])

    def test_self_attach_raises(self):
        """A command cannot be its own child."""
        cmd = Command(name="app")
        with self.assertRaises(FishcompException):
            cmd.add_command(cmd)

    def test_command_path(self):
        """command_path joins names from the root."""
        leaf = Command(name="add")
        Command(name="app", subcommands=[Command(name="remote", subcommands=[leaf])])
        self.assertEqual(leaf.command_path(), "app remote add")

    def test_find(self):
        """find resolves names and aliases level by level."""
        leaf = Command(name="remove", aliases=["rm"])
        root = Command(name="app", subcommands=[Command(name="remote", subcommands=[leaf])])

        self.assertIs(root.find(["remote", "rm"]), leaf)
        self.assertIs(root.find([]), root)
        self.assertIsNone(root.find(["remote", "missing"]))

    def test_available_subcommands(self):
        """Hidden, deprecated and help commands are not available."""
        root = Command(name="app", subcommands=[
            Command(name="a"),
            Command(name="b", hidden=True),
            Command(name="c", deprecated="gone"),
        ])
        help_cmd = root.set_help_command()

        self.assertEqual([cmd.name for cmd in root.available_subcommands()], ["a"])
        self.assertIs(root.help_command, help_cmd)
        self.assertIn(help_cmd, root.subcommands)

    def test_invalid_command_names_raise(self):
        """Command names must be readable by fish without quoting."""
        for name in ("", "my app", "my'app", "-app", "a$b", "a;b"):
            with self.assertRaises(FishcompException, msg=name):
                Command(name=name)

        for name in ("my-tool", "v1.2", "_x", "a:b+c"):
            self.assertEqual(Command(name=name).name, name)

    def test_ancestors_at_depth_bound(self):
        """Walks reach the root from exactly MAX_COMMAND_DEPTH levels down, not further."""
        root = Command(name="app")
        leaf = root
        for i in range(MAX_COMMAND_DEPTH):
            child = Command(name=f"c{i}")
            leaf.add_command(child)
            leaf = child

        self.assertEqual(len(list(leaf.ancestors())), MAX_COMMAND_DEPTH)
        self.assertIs(leaf.root(), root)

        too_deep = Command(name="extra")
        leaf.add_command(too_deep)
        with self.assertRaises(FishcompException):
            too_deep.root()

    def test_ancestor_cycle_raises(self):
        """Parent walks stop at the depth bound."""
        a, b = Command(name="a"), Command(name="b")
        a.parent, b.parent = b, a

        with self.assertRaises(FishcompException):
            a.root()

    def test_flag_name_shared_by_local_and_persistent_raises(self):
        """A command cannot declare the same flag as local and persistent."""
        with self.assertRaises(FishcompException):
            Command(name="app", flags=[Flag(name="x")], persistent_flags=[Flag(name="x")])

        cmd = Command(name="app", flags=[Flag(name="x")])
        with self.assertRaises(FishcompException):
            cmd.add_flag(Flag(name="x"), persistent=True)


class TestFlagViews(unittest.TestCase):
    """Tests for local, inherited and combined flag views."""

    def setUp(self):
        self.leaf = Command(
            name="add",
            flags=[Flag(name="fetch", short="f", type=FlagType.BOOL)],
            persistent_flags=[Flag(name="force")],
        )
        self.remote = Command(
            name="remote",
            flags=[Flag(name="list", type=FlagType.BOOL)],
            persistent_flags=[Flag(name="timeout", help="remote timeout")],
            subcommands=[self.leaf],
        )
        self.root = Command(
            name="app",
            flags=[Flag(name="version", type=FlagType.BOOL)],
            persistent_flags=[
                Flag(name="verbose", short="v", type=FlagType.BOOL),
                Flag(name="timeout", help="global timeout"),
            ],
            subcommands=[self.remote],
        )

    def test_local_non_persistent(self):
        """Only flags declared non-persistent on the command itself."""
        self.assertEqual(self.leaf.local_non_persistent_flags().names(), ["fetch"])
        self.assertEqual(self.root.local_non_persistent_flags().names(), ["version"])

    def test_non_inherited(self):
        """Own persistent and non-persistent flags."""
        self.assertEqual(self.leaf.non_inherited_flags().names(), ["fetch", "force"])

    def test_inherited_nearest_ancestor_wins(self):
        """A persistent flag redeclared nearer the command shadows the outer one."""
        inherited = self.leaf.inherited_flags()

        self.assertEqual(inherited.names(), ["timeout", "verbose"])
        self.assertEqual(inherited.lookup("timeout").help, "remote timeout")

    def test_ancestor_local_flags_not_inherited(self):
        """Non-persistent flags of ancestors are not inherited."""
        self.assertNotIn("list", self.leaf.inherited_flags())
        self.assertNotIn("version", self.remote.inherited_flags())

    def test_own_flag_shadows_inherited(self):
        """A command's own flag hides an ancestor's persistent flag of that name."""
        sub = Command(name="sub", flags=[Flag(name="verbose", type=FlagType.BOOL)])
        self.leaf.add_command(sub)
        self.assertNotIn("verbose", sub.inherited_flags())

    def test_all_flags(self):
        """all_flags is the union of own and inherited flags."""
        self.assertEqual(self.leaf.all_flags().names(), ["fetch", "force", "timeout", "verbose"])

    def test_root_inherits_nothing(self):
        """The root has no ancestors to inherit from."""
        self.assertEqual(len(self.root.inherited_flags()), 0)


class TestCLISchema(unittest.TestCase):
    """Tests for CLISchema lookups."""

    def test_get_command_by_alias(self):
        """Top-level commands resolve by name or alias."""
        build = Command(name="build", aliases=["b"])
        schema = CLISchema(root=Command(name="app", subcommands=[build, Command(name="x", hidden=True)]))

        self.assertEqual(schema.prog, "app")
        self.assertIs(schema.get_command("b"), build)
        self.assertEqual(schema.get_all_command_names(), ["build", "b"])


if __name__ == "__main__":
    unittest.main()

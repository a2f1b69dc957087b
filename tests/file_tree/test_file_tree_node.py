import pytest

from treedump.file_tree.file_tree_node import FileTreeNode


def test_file_tree_node_creation():
    node = FileTreeNode("test", is_dir=True)
    assert node.name == "test"
    assert node.is_dir
    assert node.parent is None
    assert node.children == ()


def test_add_child_sets_parent():
    root = FileTreeNode("root", is_dir=True)
    child = root.add_child("file.txt", is_dir=False)
    assert child.parent is root
    assert not child.is_dir
    assert root.get_child("file.txt") is child


def test_children_kept_in_ascending_order():
    root = FileTreeNode("root", is_dir=True)
    for name in ["delta", "alpha", "charlie", "Bravo", "echo"]:
        root.add_child(name, is_dir=False)

    # Code point order: uppercase sorts before lowercase
    assert [child.name for child in root.children] == ["Bravo", "alpha", "charlie", "delta", "echo"]


def test_add_child_is_idempotent():
    root = FileTreeNode("root", is_dir=True)
    first = root.add_child("src", is_dir=True)
    first.add_child("main.py", is_dir=False)

    second = root.add_child("src", is_dir=True)
    assert second is first
    assert len(root.children) == 1
    assert [child.name for child in second.children] == ["main.py"]


def test_add_child_keeps_existing_kind():
    root = FileTreeNode("root", is_dir=True)
    file_node = root.add_child("name", is_dir=False)
    assert root.add_child("name", is_dir=True) is file_node
    assert not file_node.is_dir


def test_add_child_under_file_raises():
    root = FileTreeNode("root", is_dir=True)
    file_node = root.add_child("file.txt", is_dir=False)
    with pytest.raises(ValueError, match="Cannot add"):
        file_node.add_child("child", is_dir=False)


def test_get_child_missing():
    root = FileTreeNode("root", is_dir=True)
    assert root.get_child("missing") is None


def test_resorted_children_keep_lookup():
    root = FileTreeNode("root", is_dir=True)
    b = root.add_child("b", is_dir=True)
    a = root.add_child("a", is_dir=True)
    assert root.children == (a, b)
    assert root.get_child("b") is b
    assert b.parent is root


def test_children_attached_once_in_insertion_order():
    root = FileTreeNode("root", is_dir=True)
    c = root.add_child("c", is_dir=False)
    a = root.add_child("a", is_dir=False)
    b = root.add_child("b", is_dir=False)

    assert root.children == (a, b, c)
    assert all(child.parent is root for child in (a, b, c))

    d = root.add_child("0", is_dir=False)
    assert root.children == (d, a, b, c)


def test_detached_child_leaves_ordered_children():
    root = FileTreeNode("root", is_dir=True)
    b = root.add_child("b", is_dir=False)
    a = root.add_child("a", is_dir=False)

    b.parent = None

    assert root.children == (a,)
    assert root.get_child("b") is None
    assert root.get_child("a") is a

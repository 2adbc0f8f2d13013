from iTestGen.Cfg.BasicBlock import BasicBlock, ENTRY, REGULAR, EXIT
from iTestGen.Cfg.Cfg import Cfg
from iTestGen.Cfg.Expression import Symbol, ParameterRef, Literal, INTEGER, OtherOperation
from iTestGen.GraphTools.PathGenerator import PathGenerator
from tests.conftest import makeCfg, gt


def nodesOf(paths):
    return [p.getPathNodes() for p in paths]


def test_single_branch_paths_in_dfs_order(singleBranch):
    paths = PathGenerator(singleBranch.cfg).genPaths()
    # fall-through is explored before the conditional successor
    assert nodesOf(paths) == [[0, 1, 3, 4], [0, 1, 2, 4]]
    assert [p.getId() for p in paths] == [0, 1]


def test_paths_start_at_entry_and_never_repeat_a_block(contradictory):
    paths = PathGenerator(contradictory.cfg).genPaths()
    assert len(paths) == 3
    for p in paths:
        nodes = p.getPathNodes()
        assert nodes[0] == contradictory.cfg.initBlockId
        assert len(set(nodes)) == len(nodes)


def test_empty_cfg_has_no_paths():
    assert PathGenerator(Cfg()).genPaths() == []


def test_entry_only_cfg_has_one_path():
    cfg = makeCfg([BasicBlock(0, ENTRY)])
    assert nodesOf(PathGenerator(cfg).genPaths()) == [[0]]


def test_loop_is_cut_at_the_first_revisit():
    x = Symbol(0, "x", INTEGER)
    cfg = makeCfg([
        BasicBlock(0, ENTRY, fallThroughSuccessor=1),
        BasicBlock(1, REGULAR, branchCondition=gt(ParameterRef(x), Literal(0)),
                   conditionalSuccessor=2, fallThroughSuccessor=3),
        BasicBlock(2, REGULAR, [OtherOperation("x--")], fallThroughSuccessor=1),
        BasicBlock(3, EXIT),
    ])
    assert nodesOf(PathGenerator(cfg).genPaths()) == [[0, 1, 3], [0, 1, 2]]


def test_exit_with_successor_keeps_exploring():
    cfg = makeCfg([
        BasicBlock(0, ENTRY, fallThroughSuccessor=1),
        BasicBlock(1, EXIT, fallThroughSuccessor=2),
        BasicBlock(2, REGULAR, [OtherOperation("cleanup")]),
    ])
    # the longer path is recorded first, then the path ending at the exit block
    assert nodesOf(PathGenerator(cfg).genPaths()) == [[0, 1, 2], [0, 1]]


def test_dangling_successor_is_not_traversed():
    cfg = makeCfg([
        BasicBlock(0, ENTRY, fallThroughSuccessor=1),
        BasicBlock(1, REGULAR, [OtherOperation("a")], fallThroughSuccessor=42),
    ])
    assert nodesOf(PathGenerator(cfg).genPaths()) == [[0, 1]]


def test_same_destination_on_both_edges_is_explored_once():
    x = Symbol(0, "x", INTEGER)
    cfg = makeCfg([
        BasicBlock(0, ENTRY, fallThroughSuccessor=1),
        BasicBlock(1, REGULAR, branchCondition=gt(ParameterRef(x), Literal(0)),
                   conditionalSuccessor=2, fallThroughSuccessor=2),
        BasicBlock(2, EXIT),
    ])
    assert nodesOf(PathGenerator(cfg).genPaths()) == [[0, 1, 2]]


def test_long_chain_does_not_hit_the_recursion_limit():
    n = 5000
    blocks = [BasicBlock(0, ENTRY, fallThroughSuccessor=1)]
    blocks += [BasicBlock(i, REGULAR, [OtherOperation("s{}".format(i))], fallThroughSuccessor=i + 1)
               for i in range(1, n)]
    blocks.append(BasicBlock(n, EXIT))
    paths = PathGenerator(makeCfg(blocks)).genPaths()
    assert len(paths) == 1
    assert len(paths[0]) == n + 1
    assert paths[0].getLastNode() == n


def test_generator_can_run_twice(singleBranch):
    generator = PathGenerator(singleBranch.cfg)
    first = nodesOf(generator.genPaths())
    assert nodesOf(generator.genPaths()) == first
    assert nodesOf(generator.getPaths()) == first


def test_path_edges_and_text(singleBranch):
    path = PathGenerator(singleBranch.cfg).genPaths()[1]
    assert path.getEdges() == [(0, 1), (1, 2), (2, 4)]
    assert 2 in path and 3 not in path
    assert str(path) == "B0 -> B1 -> B2 -> B4"

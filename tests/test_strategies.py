"""
Tests for pruned DFS and staged deepening.

Usage:
    python tests/test_strategies.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from solitaire.solver import (
    Candidate,
    Card,
    ExpansionStrategy,
    Registry,
    RunConfig,
    create_strategy,
    get_strategy_info,
    get_strategy_names,
    register_strategy,
    solve,
)
from solitaire.solver.strategies import Stage, StagePhase
from toy_board import RecordingEngine, ToyBoard, fan


def pushed_scores(engine):
    return [[b.score() for b in batch] for batch in engine.batches]


def test_registry():
    print("\n" + "=" * 60)
    print("TEST: Strategy registry")
    print("=" * 60)

    assert set(get_strategy_names()) >= {"dfs", "hsd"}
    info = {item["name"]: item["description"] for item in get_strategy_info()}
    print(f"  Strategies: {info}")
    assert info["hsd"]


def test_registry_rejects_bad_and_duplicate_names():
    registry = Registry("strategy", required=("description",))

    class Alpha(ExpansionStrategy):
        name = "alpha"
        description = "First"

        def expand(self, board, engine):
            pass

    class Inherited(Alpha):
        description = "Takes its name from Alpha"

    class Clash(Alpha):
        name = "alpha"

    class Shouting(Alpha):
        name = "Alpha"

    assert registry.register(Alpha) is Alpha
    assert registry.register(Alpha) is Alpha
    for cls in (Inherited, Clash, Shouting):
        with pytest.raises(ValueError):
            registry.register(cls)
    assert registry.names() == ["alpha"]
    assert "alpha" in registry
    assert registry.info() == [{"name": "alpha", "description": "First"}]
    with pytest.raises(ValueError, match="Unknown strategy: beta"):
        registry.get("beta")

    with pytest.raises(ValueError, match="Duplicate strategy name: dfs"):
        register_strategy(type("OtherDepthFirst", (Alpha,), {"name": "dfs"}))
    with pytest.raises(TypeError):
        register_strategy(type("NotAStrategy", (), {"name": "plain", "description": ""}))
    assert create_strategy("dfs").name == "dfs"


def test_prune_keeps_top_fraction():
    print("\n" + "=" * 60)
    print("TEST: Pruned DFS keeps n - ceil(n*3/5) children")
    print("=" * 60)

    for count, kept in ((10, 4), (5, 2), (3, 1), (1, 0)):
        strategy = create_strategy("dfs")
        engine = RecordingEngine()
        scores = list(range(count))[::-1]
        strategy.expand(fan(count, scores), engine)

        pushed = sum(len(batch) for batch in engine.batches)
        print(f"  n={count}: pushed {pushed}, pruned {strategy.pruned_branches}")
        assert pushed == kept
        assert strategy.pruned_branches == count - kept

    strategy = create_strategy("dfs")
    engine = RecordingEngine()
    strategy.expand(fan(10, [3, 9, 0, 5, 7, 1, 8, 2, 6, 4]), engine)
    # Ascending, so the best child is popped first
    assert pushed_scores(engine) == [[6, 7, 8, 9]]


def test_prune_min_children_and_full_fraction():
    strategy = create_strategy("dfs", config=RunConfig(min_children=1))
    engine = RecordingEngine()
    strategy.expand(fan(2, [1, 2]), engine)
    assert pushed_scores(engine) == [[2]]

    strategy = create_strategy("dfs", config=RunConfig(prune_fraction=1.0))
    engine = RecordingEngine()
    strategy.expand(fan(5, [4, 2, 0, 1, 3]), engine)
    assert pushed_scores(engine) == [[0, 1, 2, 3, 4]]
    assert strategy.pruned_branches == 0


def test_dead_end_pushes_nothing():
    engine = RecordingEngine()
    create_strategy("dfs").expand(ToyBoard({}), engine)
    create_strategy("hsd").expand(ToyBoard({}), engine)
    assert engine.batches == []


def test_staged_deepening_terminates_on_exhausted_tree():
    print("\n" + "=" * 60)
    print("TEST: Staged deepening on a tree that dead-ends within 3 moves")
    print("=" * 60)

    tree = {"As": ["2s", "3s"], "2s": ["4s"], "3s": ["5s"], "4s": ["6s"], "5s": ["7s"]}
    strategy = create_strategy("hsd", config=RunConfig(depth_bound=6))
    stage = strategy.run_stage(ToyBoard(tree))

    print(f"  Rounds: {stage.round}, generated: {stage.boards_generated}")
    assert stage.round == 4
    assert stage.frontier == []
    assert stage.is_exhausted
    assert stage.phase == StagePhase.DONE

    engine = RecordingEngine()
    strategy.expand(ToyBoard(tree), engine)
    assert engine.batches == []


def test_staged_deepening_selects_best_at_horizon():
    tree = {"As": ["2s", "3s"], "2s": ["4s"], "3s": ["5s"], "4s": ["6s"], "5s": ["7s"]}
    scores = {"2s": 9, "3s": 0, "4s": 1, "5s": 8}
    strategy = create_strategy("hsd", config=RunConfig(depth_bound=2))

    engine = RecordingEngine()
    strategy.expand(ToyBoard(tree, scores=scores), engine)
    assert len(engine.batches) == 1 and len(engine.batches[0]) == 1
    selected = engine.batches[0][0]
    assert selected.node == "5s"
    assert selected.path == ["01:3s", "01:5s"]


def test_staged_deepening_tie_goes_to_last_scanned():
    tree = {"As": ["2s", "3s"]}
    strategy = create_strategy("hsd", config=RunConfig(depth_bound=1))
    stage = strategy.run_stage(ToyBoard(tree, scores={"2s": 4, "3s": 4}))
    assert stage.selected.node == "3s"


def test_staged_deepening_stops_at_terminal():
    tree = {"As": ["2s", "3s"], "3s": ["4s"], "4s": ["5s"]}
    strategy = create_strategy("hsd", config=RunConfig(depth_bound=6))
    stage = strategy.run_stage(ToyBoard(tree, terminal={"2s"}, scores={"3s": 50}))
    assert stage.round == 1
    assert stage.selected.node == "2s"


def test_stage_steps_one_transition_at_a_time():
    tree = {"As": ["2s"], "2s": ["3s"]}
    strategy = create_strategy("hsd", config=RunConfig(depth_bound=1))
    stage = Stage(frontier=[ToyBoard(tree)], depth_bound=1)

    strategy.step(stage)
    assert (stage.round, stage.phase) == (1, StagePhase.EXPANDING)
    strategy.step(stage)
    assert stage.phase == StagePhase.SELECTING
    strategy.step(stage)
    assert stage.phase == StagePhase.DONE
    assert stage.selected.node == "2s"


def test_staged_deepening_solves_through_engine():
    chain = {"As": ["2s", "3s"], "2s": ["4s"], "3s": ["5s"], "5s": ["6s"], "6s": ["7s"]}
    solution = solve(ToyBoard(chain, terminal={"7s"}, scores={"5s": 3}), "hsd",
                     RunConfig(depth_bound=2))
    assert solution.paths == [["01:3s", "01:5s", "01:6s", "01:7s"]]


def test_reversal_filter():
    board = ToyBoard({"As": ["Ac"]})
    board.last_move = Candidate.column_to_column([Card.parse("Ac")], 1, 0)
    assert create_strategy("dfs").find_candidates(board) == []
    assert len(create_strategy("dfs", config=RunConfig(reject_reversals=False))
               .find_candidates(board)) == 1


def test_score_cache_is_per_instance():
    print("\n" + "=" * 60)
    print("TEST: Score caching")
    print("=" * 60)

    board = ToyBoard({"As": ["2s"]}, scores={"As": 3, "2s": 7})
    ToyBoard.score_calls = 0
    assert board.score() == 3
    assert board.score() == 3
    assert ToyBoard.score_calls == 1

    child = board.apply(create_strategy("dfs").find_candidates(board)[0])
    assert child.score() == 7
    assert ToyBoard.score_calls == 2
    assert board.clone().score() == 3
    assert ToyBoard.score_calls == 3


def main():
    """Run all tests."""
    print("\n" + "#" * 60)
    print("# STRATEGY TESTS")
    print("#" * 60)

    tests = [value for name, value in sorted(globals().items())
             if name.startswith("test_") and callable(value)]
    failed = 0
    for test in tests:
        try:
            test()
            print(f"  {test.__name__}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {test.__name__}: [FAIL] {e}")

    print()
    print("All tests PASSED!" if not failed else f"{failed} tests FAILED!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())

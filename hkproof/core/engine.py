"""
The given-clause search loop.

Each step takes one clause off the frontier (set_of_support), resolves
it against every clause already used, files whatever survives the
redundancy filters back onto the frontier, and retires the focus to
usable. The combination function is pluggable; the loop never looks
inside a clause.
"""

from typing import Callable, Optional
from .state import Clause, SearchState


def _redundant(result: Clause, known: set, subsumes_fn, prune_fn,
               state: SearchState) -> str:
    """Why result should be dropped, or "" to keep it."""
    if result in known:
        return "known"
    if subsumes_fn and any(subsumes_fn(k, result) for k in known):
        return "subsumed"
    if prune_fn and prune_fn(result, state):
        return "pruned"
    return ""


def _back_subsume(state: SearchState, new_clauses: list, subsumes_fn,
                  verbose: bool):
    """Remove older clauses that one of the new clauses makes redundant."""
    for old in state.all_clauses():
        if not any(subsumes_fn(new, old) for new in new_clauses):
            continue
        if old in state.set_of_support:
            state.set_of_support.remove(old)
        if old in state.usable:
            state.usable.remove(old)
        if verbose:
            print(f"  [back-subsumed] {old.name}")


def search_step(
    state: SearchState,
    combine_fn: Callable,
    choose_focus_fn: Optional[Callable] = None,
    subsumes_fn: Optional[Callable] = None,
    prune_fn: Optional[Callable] = None,
    max_new_clauses: int = 50,
    verbose: bool = True,
) -> SearchState:
    """
    Run one iteration of the loop on state, in place, and return it.

    combine_fn(focus, partner) yields candidate clauses. choose_focus_fn
    picks from the frontier (FIFO when omitted). subsumes_fn(a, b) says
    a makes b redundant; prune_fn(clause, state) discards a clause
    outright. At most max_new_clauses are kept per iteration.
    """
    if not state.set_of_support:
        state.halted = True
        state.halt_reason = "set_of_support empty"
        return state

    frontier = state.set_of_support
    if choose_focus_fn is None:
        focus = frontier.popleft()
    else:
        focus = choose_focus_fn(frontier)
        frontier.remove(focus)

    state.step += 1
    if verbose:
        print(f"\n--- Step {state.step}: focus {focus.name} ---")

    known = {focus, *frontier, *state.usable}
    kept = []
    candidates = (r for partner in state.usable for r in combine_fn(focus, partner))
    for result in candidates:
        reason = _redundant(result, known, subsumes_fn, prune_fn, state)
        if reason:
            if verbose and reason != "known":
                print(f"  [{reason}] {result.name}")
            continue
        result.step = state.step
        kept.append(result)
        known.add(result)
        if verbose:
            print(f"  [new] {result.name}")
        if len(kept) >= max_new_clauses:
            if verbose:
                print("  [cap] max_new_clauses reached")
            break

    if subsumes_fn and kept:
        _back_subsume(state, kept, subsumes_fn, verbose)

    state.usable.append(focus)
    frontier.extend(kept)
    state.history.append({
        "step": state.step,
        "focus": focus.name,
        "produced": [c.name for c in kept],
        "set_of_support_size": len(frontier),
        "usable_size": len(state.usable),
    })
    if verbose:
        print(f"  set of support: {len(frontier)} | usable: {len(state.usable)}")
    return state


def run_search(
    state: SearchState,
    combine_fn: Callable,
    max_steps: int = 100,
    stop_fn: Optional[Callable] = None,
    save_path: Optional[str] = None,
    **kwargs,
) -> SearchState:
    """
    Step until the frontier empties, stop_fn(state) holds, or max_steps pass.

    stop_fn is checked before every step and once more after the last.
    kwargs go to search_step. With save_path the state is written out
    after each step, so an interrupted search can be resumed with
    SearchState.load.
    """
    def stopped():
        if state.halted:
            return True
        if stop_fn is not None and stop_fn(state):
            state.halted = True
            state.halt_reason = "stop condition met"
        return state.halted

    steps = 0
    while not stopped() and steps < max_steps:
        search_step(state, combine_fn, **kwargs)
        steps += 1
        if save_path:
            state.save(save_path)
    return state

from functools import wraps
from typing import *
import enum
import logging

from proplogic.formula import Formula, FormulaKind
from proplogic.context import ProofContext
from proplogic.proof import ProofNode, Rule

logger = logging.getLogger(__name__)


"""

This module is the heart of the project: it searches for a
natural-deduction proof of a formula.

The search works backwards from the goal. To prove

  (A ∨ B → C) → (A → C) ∧ (B → C)

we assume its antecedent (as assumption 1) and go on to prove
(A → C) ∧ (B → C), which breaks into two goals, and so on until
every goal is closed by an assumption. The result is a tree:

  prove <(A ∨ B → C) → (A → C) ∧ (B → C)> via to-intro, discharging 1:
  |   prove <(A → C) ∧ (B → C)> via and-intro:
  |   |   prove <A → C> via to-intro, discharging 2:
  |   |   |   prove <C> via to-elim:
  |   |   |   |   prove <A ∨ B> via or-intro-left:
  |   |   |   |   |   prove <A> via assumption 2
  |   |   |   |   prove <A ∨ B → C> via assumption 1
  |   |   prove <B → C> via to-intro, discharging 3:
  |   |   |   ...

For each goal, the searchers below are tried in order and the first
proof found wins:

  1) ASSUMPTION  - the goal is itself a live assumption
  2) AND_INTRO, OR_INTRO, TO_INTRO
                 - the introduction rule of the goal's connective
  3) ELIM        - take a live assumption apart with and-elim and
                   to-elim until the goal falls out of it
  4) OR_ELIM     - as ELIM, but also split disjunctions into cases

Failure is not an exception. Every searcher returns either a
ProofNode or a SearchExhausted value, and a failed searcher only
means that the next one gets its turn.

Negation has no rules of its own. A goal or an assumption of the
form ¬A is only ever matched as a whole, so formulas that need
excluded middle or double-negation elimination, such as ¬¬A → A,
are out of reach. The search is best effort.

"""


class Budget:
  """
  Limits on one top-level search: how deep goals may nest, and how
  many goals may be attempted in total.
  """

  def __init__(self, max_depth: int = 32, max_steps: int = 200_000):
    if max_depth < 1 or max_steps < 1:
      raise ValueError('search budget must be positive')
    self.max_depth = max_depth
    self.max_steps = max_steps

  def __repr__(self):
    return f'Budget(max_depth={self.max_depth}, max_steps={self.max_steps})'


class SearchReason(enum.Enum):
  RULES  = 'no rule applies'
  BUDGET = 'search budget exhausted'


class SearchExhausted:
  """
  The outcome of a search that found no proof.
  """

  def __init__(self, goal: Formula, reason: SearchReason = SearchReason.RULES):
    self.goal = goal
    self.reason = reason

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.goal == other.goal
      and self.reason == other.reason)

  def __str__(self):
    return f'could not infer: {self.goal} ({self.reason.value})'

  def __repr__(self):
    return f'<SearchExhausted {self.goal}: {self.reason.name}>'


class SearchState:
  """
  Bookkeeping owned by a single top-level search: the counter that
  hands out reference numbers, the step count, and the goals that
  are being pursued on the current path.
  """

  def __init__(self, budget: Budget, first_number: int):
    self.budget = budget
    self.next_number = first_number
    self.steps = 0
    self.depth = 0
    self.depth_limit = 0
    self.cut_off = False
    self.out_of_steps = False
    self.pending = set()

  def start_pass(self, depth_limit: int):
    self.depth_limit = depth_limit
    self.cut_off = False

  def fresh(self) -> int:
    # numbers are never reused, not even across passes
    number = self.next_number
    self.next_number += 1
    return number


Result = Union[ProofNode, SearchExhausted]

def found(result: Result) -> bool:
  return isinstance(result, ProofNode)


def find_proof(goal: Formula, context: ProofContext, state: SearchState) -> Result:

  """

  Search for a proof of `goal` using the assumptions in `context`.

  Returns SearchExhausted, with reason BUDGET, when the goal lies
  deeper than this pass allows or the step budget has run out.
  A goal that is already being pursued further up the current path,
  under the same assumptions, fails straight away; pursuing it again
  could only go round in circles.

  """

  if state.steps >= state.budget.max_steps:
    state.out_of_steps = True
    return SearchExhausted(goal, SearchReason.BUDGET)

  if state.depth >= state.depth_limit:
    state.cut_off = True
    return SearchExhausted(goal, SearchReason.BUDGET)

  key = (goal, context.formulas)
  if key in state.pending:
    return SearchExhausted(goal)

  state.steps += 1
  state.depth += 1
  state.pending.add(key)

  result = SearchExhausted(goal)
  for searcher in SEARCHERS:
    proof = searcher(goal, context, state)
    if found(proof):
      result = proof
      break

  state.pending.discard(key)
  state.depth -= 1
  return result


def goal_kind(kind: FormulaKind):
  def decorator(function):

    @wraps(function)
    def wrapper(goal, context, state):
      if goal.kind != kind:
        return SearchExhausted(goal)
      return function(goal, context, state)

    return wrapper
  return decorator


def ASSUMPTION(goal, context, state):
  """
  Proofs of the form

    prove <[goal]> via assumption

  """
  assumption = context.lookup(goal)
  if assumption is None:
    return SearchExhausted(goal)
  return ProofNode.assumption(assumption)

"""

INTRO rules

Each of these only applies to goals with one particular outermost
connective, and breaks the goal into its parts.

"""

@goal_kind(FormulaKind.AND)
def AND_INTRO(goal, context, state):
  """
  Proofs of the form

    prove <[left] ∧ [right]> via and-intro:
      prove <[left]> via [rule]: ...
      prove <[right]> via [rule]: ...

  """

  lproof = find_proof(goal.left, context, state)
  if not found(lproof):
    return lproof

  rproof = find_proof(goal.right, context, state)
  if not found(rproof):
    return rproof

  return ProofNode(
    claim     = goal,
    rule      = Rule.AND_INTRO,
    subproofs = [lproof, rproof],
  )

@goal_kind(FormulaKind.OR)
def OR_INTRO(goal, context, state):
  """
  Proofs of the form

    prove <[left] ∨ [right]> via or-intro-left:
      prove <[left]> via [rule]: ...

  or, failing that, of the form

    prove <[left] ∨ [right]> via or-intro-right:
      prove <[right]> via [rule]: ...

  """

  for side, rule in [
    (goal.left,  Rule.OR_INTRO_LEFT),
    (goal.right, Rule.OR_INTRO_RIGHT),
  ]:
    proof = find_proof(side, context, state)
    if found(proof):
      return ProofNode(
        claim     = goal,
        rule      = rule,
        subproofs = [proof],
      )

  return SearchExhausted(goal)

@goal_kind(FormulaKind.TO)
def TO_INTRO(goal, context, state):
  """
  Proofs of the form

    prove <[left] → [right]> via to-intro, discharging n:
      assuming <[left]> as n, prove <[right]> via [rule]: ...

  """

  number = state.fresh()
  subproof = find_proof(goal.right, context.push(goal.left, number), state)
  if not found(subproof):
    return subproof

  return ProofNode(
    claim      = goal,
    rule       = Rule.TO_INTRO,
    subproofs  = [subproof],
    discharges = [number],
  )

"""

ELIM rules

Elimination works forwards from what is already assumed. Starting
from a live assumption we keep applying and-elim and to-elim, each
step giving a new fact, until the fact is the goal:

  assume (A → B) ∧ C
    and-elim gives  A → B
    to-elim gives   B        (once A has been proved separately)

A chain is only followed if the goal can come out at the end of it,
which `reaches` decides by looking at the shape of the fact alone.

or-elim is the expensive one: splitting a disjunction can prove any
goal, so it is only tried once every chain without a split failed.
Assumptions are taken in the order they were made.

"""

def reaches(fact: Formula, goal: Formula, *, split: bool) -> bool:
  if fact == goal:
    return True
  if fact.kind == FormulaKind.AND:
    return reaches(fact.left, goal, split=split) or reaches(fact.right, goal, split=split)
  if fact.kind == FormulaKind.TO:
    return reaches(fact.right, goal, split=split)
  if fact.kind == FormulaKind.OR:
    return split
  return False

def ELIM(goal, context, state):
  return eliminate(goal, context, state, split=False)

def OR_ELIM(goal, context, state):
  return eliminate(goal, context, state, split=True)

def eliminate(goal, context, state, *, split):
  for assumption in context:
    if assumption.formula == goal:
      continue
    if not reaches(assumption.formula, goal, split=split):
      continue
    proof = use(goal, context, state, ProofNode.assumption(assumption), split=split)
    if found(proof):
      return proof
  return SearchExhausted(goal)

def use(goal, context, state, proof, *, split):
  """
  Given `proof` of some fact, try to prove `goal` by taking
  that fact apart.
  """

  fact = proof.claim

  if fact == goal:
    return proof

  if fact.kind == FormulaKind.AND:
    for side, rule in [
      (fact.left,  Rule.AND_ELIM_LEFT),
      (fact.right, Rule.AND_ELIM_RIGHT),
    ]:
      if not reaches(side, goal, split=split):
        continue
      side_proof = ProofNode(
        claim     = side,
        rule      = rule,
        subproofs = [proof],
      )
      result = use(goal, context, state, side_proof, split=split)
      if found(result):
        return result

  elif fact.kind == FormulaKind.TO:
    if reaches(fact.right, goal, split=split):
      antecedent_proof = find_proof(fact.left, context, state)
      if found(antecedent_proof):
        consequent_proof = ProofNode(
          claim     = fact.right,
          rule      = Rule.TO_ELIM,
          subproofs = [antecedent_proof, proof],
        )
        return use(goal, context, state, consequent_proof, split=split)

  elif fact.kind == FormulaKind.OR and split:
    return split_cases(goal, context, state, proof)

  return SearchExhausted(goal)

def split_cases(goal, context, state, disjunction_proof):
  """
  Proofs of the form

    prove <[goal]> via or-elim, discharging l and r:
      prove <[left] ∨ [right]> via [rule]: ...
      assuming <[left]> as l, prove <[goal]> via [rule]: ...
      assuming <[right]> as r, prove <[goal]> via [rule]: ...

  A disjunction is not split if either side is assumed already;
  that case split would be the same one again.
  """

  disjunction = disjunction_proof.claim

  if (context.lookup(disjunction.left) is not None
      or context.lookup(disjunction.right) is not None):
    return SearchExhausted(goal)

  lnumber = state.fresh()
  lproof = find_proof(goal, context.push(disjunction.left, lnumber), state)
  if not found(lproof):
    return lproof

  rnumber = state.fresh()
  rproof = find_proof(goal, context.push(disjunction.right, rnumber), state)
  if not found(rproof):
    return rproof

  return ProofNode(
    claim      = goal,
    rule       = Rule.OR_ELIM,
    subproofs  = [disjunction_proof, lproof, rproof],
    discharges = [lnumber, rnumber],
  )


SEARCHERS = (
  ASSUMPTION,
  AND_INTRO,
  OR_INTRO,
  TO_INTRO,
  ELIM,
  OR_ELIM,
)


# == # == # == #


def search(
  goal: Formula,
  context: Optional[ProofContext] = None,
  budget: Optional[Budget] = None,
) -> Result:

  """

  Prove `goal` from the assumptions in `context`, or report that no
  proof was found.

  Goals are searched with an increasing depth limit, so the proof
  returned is one of the shallowest the rules can find. A pass that
  fails without ever reaching its depth limit has tried everything,
  and the search stops there with reason RULES.

  The proof is renumbered before it is returned: the numbers it
  discharges count up from one past the largest number in `context`,
  in the order they appear reading the tree top-down.

  """

  if context is None:
    context = ProofContext()
  if budget is None:
    budget = Budget()

  first_number = context.max_number + 1
  state = SearchState(budget, first_number)

  for depth_limit in range(1, budget.max_depth + 1):
    state.start_pass(depth_limit)
    result = find_proof(goal, context, state)

    if found(result):
      proof = result.renumbered(first_number)
      if logger.isEnabledFor(logging.DEBUG):
        logger.debug('proved %s in %d steps:\n%s', goal, state.steps, proof.pretty)
      return proof

    if state.out_of_steps:
      break

    if not state.cut_off:
      logger.debug('no proof of %s after %d steps', goal, state.steps)
      return SearchExhausted(goal, SearchReason.RULES)

  logger.debug('gave up on %s after %d steps (%r)', goal, state.steps, budget)
  return SearchExhausted(goal, SearchReason.BUDGET)

def prove_formula(formula: Formula, budget: Optional[Budget] = None) -> Result:
  return search(formula, ProofContext(), budget)

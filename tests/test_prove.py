import logging

import pytest

from proplogic.context import ProofContext
from proplogic.formula import Atom, Not, And, Or, To
from proplogic.parse import parse
from proplogic.proof import ProofNode, Rule, check_discharges
from proplogic.prove import Budget, SearchExhausted, SearchReason, search, prove_formula

A, B, C = Atom('A'), Atom('B'), Atom('C')

THEOREMS = [
  'A to A',
  'A to B to A',
  'A to A to A',
  'A and B to B and A',
  'A or B to B or A',
  'A to A or B',
  '(A to B) to (B to C) to A to C',
  '(A to B to C) to (A and B to C)',
  '(A and B to C) to (A to B to C)',
  'A and (B or C) to (A and B) or (A and C)',
  '((A or B) and (A to C)) and (B to C) to C',
  '((A or B) to C) to (A to C) and (B to C)',
  'not A to not A',
  '(A to not B) to A to not B',
]


def discharging_ancestors(proof, number, ancestors=()):
  """
  For every leaf that uses `number`, the ancestors that discharge it
  """
  if proof.rule == Rule.ASSUMPTION:
    if proof.reference == number:
      yield [node for node in ancestors if number in node.discharged]
    return
  for subproof in proof.subproofs:
    yield from discharging_ancestors(subproof, number, ancestors + (proof,))


class Tests:

  def test_worked_example(self):
    proof = prove_formula(parse('((A or B) to C) to (A to C) and (B to C)'))

    assert proof.claim == To(To(Or(A, B), C), And(To(A, C), To(B, C)))
    assert proof.rule == Rule.TO_INTRO
    assert proof.discharges == (1,)

    [conjunction] = proof.subproofs
    assert conjunction.rule == Rule.AND_INTRO
    left, right = conjunction.subproofs
    assert (left.claim, left.discharges) == (To(A, C), (2,))
    assert (right.claim, right.discharges) == (To(B, C), (3,))

    [modus_ponens] = left.subproofs
    assert modus_ponens.rule == Rule.TO_ELIM
    antecedent, implication = modus_ponens.subproofs
    assert antecedent.rule == Rule.OR_INTRO_LEFT
    assert implication == ProofNode(claim=To(Or(A, B), C), rule=Rule.ASSUMPTION, reference=1)

    leaves = [(str(leaf.claim), leaf.reference) for leaf in proof.leaves()]
    assert leaves == [('A', 2), ('A ∨ B → C', 1), ('B', 3), ('A ∨ B → C', 1)]

  @pytest.mark.parametrize('text', THEOREMS)
  def test_theorems_are_proved_soundly(self, text):
    goal = parse(text)
    proof = prove_formula(goal)

    assert isinstance(proof, ProofNode)
    assert proof.claim == goal
    check_discharges(proof)

    for leaf in proof.leaves():
      owners = next(discharging_ancestors(proof, leaf.reference))
      assert len(owners) == 1

  @pytest.mark.parametrize('text', THEOREMS)
  def test_numbers_count_up_from_one(self, text):
    proof = prove_formula(parse(text))
    numbers = []
    def collect(node):
      numbers.extend(node.discharged)
      for subproof in node.subproofs:
        collect(subproof)
    collect(proof)
    assert numbers == list(range(1, len(numbers) + 1))

  def test_excluded_middle_is_out_of_reach(self):
    goal = parse('not (not A) to A')
    assert search(goal) == SearchExhausted(goal, SearchReason.RULES)

  def test_double_negation_intro_is_out_of_reach(self):
    goal = parse('A to not not A')
    result = search(goal)
    assert isinstance(result, SearchExhausted)
    assert result.reason == SearchReason.RULES

  def test_non_theorem_fails(self):
    result = search(parse('A to B'))
    assert isinstance(result, SearchExhausted)

  def test_or_is_proved_from_matching_assumption(self):
    context = ProofContext().push(Or(A, B), 1)
    proof = search(Or(A, B), context)
    assert proof == ProofNode(claim=Or(A, B), rule=Rule.ASSUMPTION, reference=1)

  def test_modus_ponens_from_context(self):
    context = ProofContext().push(To(A, B), 1).push(A, 2)
    proof = search(B, context)
    assert proof.rule == Rule.TO_ELIM
    assert [leaf.reference for leaf in proof.leaves()] == [2, 1]
    check_discharges(proof, context)

  def test_elimination_uses_assumptions_in_order(self):
    context = ProofContext().push(And(A, B), 1).push(And(B, A), 2)
    proof = search(A, context)
    assert proof.rule == Rule.AND_ELIM_LEFT
    assert proof.subproofs[0].reference == 1

  def test_elimination_chains(self):
    context = ProofContext().push(And(To(A, B), A), 1)
    proof = search(B, context)
    assert proof.rule == Rule.TO_ELIM
    antecedent, implication = proof.subproofs
    assert antecedent.rule == Rule.AND_ELIM_RIGHT
    assert implication.rule == Rule.AND_ELIM_LEFT

  def test_fresh_numbers_follow_context(self):
    context = ProofContext().push(A, 5)
    proof = search(To(B, And(A, B)), context)
    assert proof.discharges == (6,)
    check_discharges(proof, context)

  def test_unused_discharge_is_dropped(self):
    proof = prove_formula(parse('A to B to A'))
    assert proof.discharges == (1,)
    assert proof.subproofs[0].discharges == (None,)

  def test_innermost_assumption_is_used(self):
    proof = prove_formula(parse('A to A to A'))
    assert proof.discharges == (None,)
    assert proof.subproofs[0].discharges == (1,)

  def test_depth_budget(self):
    goal = parse('((A or B) to C) to (A to C) and (B to C)')
    result = search(goal, budget=Budget(max_depth=3))
    assert result == SearchExhausted(goal, SearchReason.BUDGET)

  def test_step_budget(self):
    goal = parse('A to A')
    result = search(goal, budget=Budget(max_steps=1))
    assert result == SearchExhausted(goal, SearchReason.BUDGET)

  def test_budget_must_be_positive(self):
    with pytest.raises(ValueError):
      Budget(max_depth=0)

  def test_search_is_deterministic(self):
    goal = parse('A and (B or C) to (A and B) or (A and C)')
    assert search(goal) == search(goal)

  def test_outline_is_only_built_for_debug_logging(self, monkeypatch, caplog):
    def outline(proof):
      raise AssertionError('outline built with debug logging off')
    monkeypatch.setattr(ProofNode, 'pretty', property(outline))

    with caplog.at_level(logging.INFO, logger='proplogic.prove'):
      assert isinstance(search(parse('A to A')), ProofNode)

  def test_debug_log_shows_outline(self, caplog):
    with caplog.at_level(logging.DEBUG, logger='proplogic.prove'):
      search(parse('A to A'))
    assert 'prove <A → A> via to-intro' in caplog.text

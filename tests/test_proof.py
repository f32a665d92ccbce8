import pytest

from proplogic.context import ProofContext
from proplogic.formula import Atom, And, Or, To
from proplogic.proof import ProofNode, Rule, InternalInvariantViolation, check_discharges

A, B = Atom('A'), Atom('B')


def leaf(formula, number):
  return ProofNode(claim=formula, rule=Rule.ASSUMPTION, reference=number)

def identity(number):
  return ProofNode(
    claim      = To(A, A),
    rule       = Rule.TO_INTRO,
    subproofs  = [leaf(A, number)],
    discharges = [number],
  )


class Tests:

  def test_well_formed_tree_passes(self):
    check_discharges(identity(1))

  def test_leaf_outside_its_scope(self):
    proof = ProofNode(
      claim     = And(To(A, A), A),
      rule      = Rule.AND_INTRO,
      subproofs = [identity(1), leaf(A, 1)],
    )
    with pytest.raises(InternalInvariantViolation):
      check_discharges(proof)

  def test_leaf_with_wrong_formula(self):
    proof = ProofNode(
      claim      = To(A, B),
      rule       = Rule.TO_INTRO,
      subproofs  = [leaf(B, 1)],
      discharges = [1],
    )
    with pytest.raises(InternalInvariantViolation):
      check_discharges(proof)

  def test_number_discharged_twice(self):
    proof = ProofNode(
      claim     = And(To(A, A), To(A, A)),
      rule      = Rule.AND_INTRO,
      subproofs = [identity(1), identity(1)],
    )
    with pytest.raises(InternalInvariantViolation):
      check_discharges(proof)

  def test_discharge_shadowing_context(self):
    with pytest.raises(InternalInvariantViolation):
      check_discharges(identity(1), ProofContext().push(B, 1))

  def test_rule_shape(self):
    proof = ProofNode(
      claim     = Or(A, B),
      rule      = Rule.OR_INTRO_LEFT,
      subproofs = [leaf(B, 1)],
    )
    with pytest.raises(InternalInvariantViolation):
      check_discharges(proof, ProofContext().push(B, 1))

  def test_or_elim_cases_are_scoped(self):
    disjunction = leaf(Or(A, B), 1)
    left = ProofNode(claim=Or(B, A), rule=Rule.OR_INTRO_RIGHT, subproofs=[leaf(A, 2)])
    right = ProofNode(claim=Or(B, A), rule=Rule.OR_INTRO_LEFT, subproofs=[leaf(B, 2)])
    proof = ProofNode(
      claim      = Or(B, A),
      rule       = Rule.OR_ELIM,
      subproofs  = [disjunction, left, right],
      discharges = [2, 3],
    )
    with pytest.raises(InternalInvariantViolation):
      check_discharges(proof, ProofContext().push(Or(A, B), 1))

  def test_renumbered(self):
    proof = ProofNode(
      claim      = To(A, To(B, A)),
      rule       = Rule.TO_INTRO,
      subproofs  = [ProofNode(
        claim      = To(B, A),
        rule       = Rule.TO_INTRO,
        subproofs  = [leaf(A, 7)],
        discharges = [9],
      )],
      discharges = [7],
    )
    renumbered = proof.renumbered()
    assert renumbered.discharges == (1,)
    assert renumbered.subproofs[0].discharges == (None,)
    assert [node.reference for node in renumbered.leaves()] == [1]
    check_discharges(renumbered)

  def test_renumbered_keeps_open_references(self):
    proof = ProofNode(claim=A, rule=Rule.AND_ELIM_LEFT, subproofs=[leaf(And(A, B), 4)])
    assert proof.renumbered() == proof

  def test_pretty(self):
    assert identity(1).pretty == (
      'prove <A → A> via to-intro, discharging 1:\n'
      '|   prove <A> via assumption 1'
    )


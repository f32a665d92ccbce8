"""
Glyphs used when printing formulas and proofs.

Every connective has a plain (Unicode) spelling and a TeX spelling.
"""

pretty_NOT   = '¬'
pretty_AND   = '∧'
pretty_OR    = '∨'
pretty_TO    = '→'

pretty_OPEN  = '('
pretty_CLOSE = ')'

tex_NOT = r'\lnot'
tex_AND = r'\land'
tex_OR  = r'\lor'
tex_TO  = r'\to'

import sys, random
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .location import lookup_span, known_text
from .ontology import Phrase, ValueExpression
from . import syntax

class EvalError(Exception):
	"""
	Something about a constant expression defies evaluation.
	Low-level helpers raise these without an expression;
	the evaluator supplies the innermost one on the way out.
	"""
	def __init__(self, message:str, expr:Optional[ValueExpression]=None):
		super().__init__(message)
		self.message = message
		self.expr = expr
	
	def at(self, expr:ValueExpression) -> "EvalError":
		"""
		An error that already blames some expression keeps it.
		Otherwise, the result is a fresh error of the same kind blaming this one.
		"""
		if self.expr is not None: return self
		return type(self)(self.message, expr)

class NonConstantExpressionError(EvalError):
	@classmethod
	def about(cls, expr:ValueExpression) -> "NonConstantExpressionError":
		try: text = str(expr)
		except RecursionError: text = "<%s nested too deeply to print>" % type(expr).__name__
		return cls("Found non-constant expression %s during constant evaluation" % text, expr)

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]
	
	minced_oaths = [
		'Blast', 'Botheration', 'Crud', 'Drat', 'Fiddlesticks',
		'Good Grief', 'Great Scott', 'Heavens', 'Nuts', 'Rats',
	]
	
	resignations = [
		'Those constants do not add up.',
		'Some of this must wait for run-time.',
		'I cannot fold that.',
	]
	
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found while folding, for presentation all at once. """
	_issues : list["Pic"]
	
	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
	
	@property
	def issues(self) -> list["Pic"]: return self._issues
	
	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	
	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)
	
	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)
			
	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)
	
	# Methods the folding pass calls:
	
	def not_constant(self, decl:syntax.VariableDecl):
		intro = "The initializer of constant '%s' cannot be worked out at compile-time." % decl.nom.text
		problem = [Annotation(decl.expr, "not a constant expression")]
		self.issue(Pic(intro, problem))
	
	def failed_evaluation(self, decl:Optional[syntax.VariableDecl], ex:EvalError):
		if decl is None: intro = "Constant evaluation failed."
		else: intro = "Constant evaluation of '%s' failed." % decl.nom.text
		if isinstance(ex.expr, Phrase): problem, footer = [Annotation(ex.expr, ex.message)], []
		else: problem, footer = [], [ex.message]
		self.issue(Pic(intro, problem, footer))

class Annotation:
	path: Optional[Path]
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		span = lookup_span(*node.span())
		self.path = span.path
		self.slice = span.slice
		self.caption = caption
	def illustrate(self):
		if self.path is None:
			return "  (built-in) " + self.caption
		source = _fetch(self.path)
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _fetch(path) -> SourceText:
	text = known_text(path)
	if text is not None:
		return SourceText(text, filename=str(path))
	return _read(path)

@lru_cache(5)
def _read(path) -> SourceText:
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()

"""
Points and spans within a collection of source texts.
Every token gets an integer; contiguous runs of those integers belong to one source.
A front-end registers each source with `start_segment` and then each token with `insert_token`.
Index zero is the built-in location, for nodes that come from nowhere in particular.
"""
from bisect import bisect_right
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path]
	slice: slice

_slices: list[slice] = []
_bounds: list[int] = []
_paths: list[Optional[Path]] = []
_texts: dict[Path, str] = {}

def reset_location_index():
	for it in _slices, _bounds, _paths: it.clear()
	_texts.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None)
	insert_token(0, 0)

def start_segment(path:Optional[Path], text:Optional[str]=None):
	"""
	Subsequent tokens belong to this source.
	Supply the text if it does not live in a file, or if you already have it handy.
	"""
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices))
	_paths.append(path)
	if text is not None:
		assert path is not None
		_texts[path] = text

def insert_token(start:int, stop:int) -> int:
	index = len(_slices)
	_slices.append(slice(start, stop))
	return index

def lookup_token(index:int) -> Span:
	segment_index = bisect_right(_bounds, index)-1
	return Span(_paths[segment_index], _slices[index])

def lookup_span(first: int, last:int) -> Span:
	left = lookup_token(first)
	right = lookup_token(last)
	assert left.path == right.path
	return Span(left.path, slice(left.slice.start, right.slice.stop))

def known_text(path:Path) -> Optional[str]:
	return _texts.get(path)

reset_location_index()

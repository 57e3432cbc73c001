#    shapexml/__init__.py - SHAPE-aware XML marshaller
#    Copyright (C) 2009 Shawn Sulma <genosha@470th.org>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU General Public License as published by
#    the Free Software Foundation, either version 3 of the License, or
#    (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU General Public License for more details.
#
#    You should have received a copy of the GNU General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
r"""SHAPEXML is a library to move plain data structures (the dicts, lists and scalars
that come out of decoding JSON) into and out of the attribute-free XML spoken by
accounting web services.

XML has no native list type, so a structure has to be flattened into elements using a
handful of conventions.  This module holds the format-independent part of that: the
rules deciding what *shape* a value has, and how keys become element names.  The
ElementTree-based encoder and decoder live in :mod:`shapexml.XML`; a :mod:`simplejson`
bridge lives in :mod:`shapexml.JSON`; the request/response boundary for the remote API
lives in :mod:`shapexml.API`.

A structure value is one of three shapes:

 - a *leaf*: ``str``, ``int``, ``float``, ``bool`` or ``None``.  Leaves are flattened to
   text when encoded (``True`` becomes ``"true"``, ``None`` becomes ``""``) and always
   come back as ``str``;
 - a *record*: a ``dict`` whose keys become uniquely-named child elements, in
   insertion order;
 - a *sequence*: a ``list`` or ``tuple``, or a ``dict`` whose keys are exactly
   ``0, 1, ..., n-1`` in that order.  Sequence items become repeated sibling elements.

Naming conventions:

 - keys are stripped of every character outside ``[A-Za-z0-9-_.:]``.  A key left
   empty, or holding a ``:`` (which would need a namespace to read back), is refused
   with :class:`InvalidTagError`;
 - leaf text holding characters XML 1.0 cannot carry is refused with
   :class:`InvalidTextError`;
 - numeric keys (and keys that still cannot start an element name once stripped) are
   replaced by the *item tag* of the enclosing element, which is the enclosing tag with
   one trailing "s" removed (``Invoices`` -> ``Invoice``);
 - items of a list nested directly inside another list are named by the marker tag
   ``anon``.

On the way back, repetition of a tag is the only signal that something was a list.  A
list holding a single item therefore decodes to the bare item.  That asymmetry is part
of the wire format and is kept.
"""
import re

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Shape', 'classify', 'is_record_like', 'is_numeric_key', 'is_element_name'
    , 'sanitize_key', 'singularize', 'leaf_text', 'entries'
    , 'ShapeXMLError', 'InvalidTagError', 'InvalidTextError', 'MalformedDocumentError', 'DepthExceededError'
    , 'MARKER_TAG', 'FAULT_TAG', 'DEFAULT_MAX_DEPTH' ]

# reserved element name for positional items of a list nested in a list.
MARKER_TAG = "anon"
# root element of the remote service's own error documents.
FAULT_TAG = "ApiException"
DEFAULT_MAX_DEPTH = 128

class ShapeXMLError ( ValueError ) :
    r"""Base class of all errors reported by the codec."""
    pass

class InvalidTagError ( ShapeXMLError ) :
    r"""A key or root tag has nothing left that can be used as an element name."""
    def __init__ ( self, tag ) :
        ShapeXMLError.__init__( self, "%r does not produce a valid element name." % ( tag, ) )
        self.tag = tag

class InvalidTextError ( ShapeXMLError ) :
    r"""A leaf holds characters that XML 1.0 does not allow, even as references."""
    def __init__ ( self, text ) :
        ShapeXMLError.__init__( self, "%r holds characters not allowed in XML." % ( text, ) )
        self.text = text

class MalformedDocumentError ( ShapeXMLError ) :
    r"""The input could not be parsed.  ``document`` keeps the offending input."""
    def __init__ ( self, document, reason = None ) :
        ShapeXMLError.__init__( self, "Malformed document" + ( ": " + reason if reason else "." ) )
        self.document = document
        self.reason = reason

class DepthExceededError ( ShapeXMLError ) :
    r"""Nesting went past the configured ``max_depth``."""
    def __init__ ( self, depth, limit ) :
        ShapeXMLError.__init__( self, "nesting depth %d exceeds the limit of %d." % ( depth, limit ) )
        self.depth = depth
        self.limit = limit

class Shape ( object ) :
    LEAF = "leaf"
    RECORD = "record"
    SEQUENCE = "sequence"

_unsafe = re.compile( r"[^A-Za-z0-9\-_.:]" )
_numeric = re.compile( r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$" )
_index = re.compile( r"^(0|[1-9][0-9]*)$" )
# no ":" - a prefixed name would need a namespace declaration to parse again.
_element_name = re.compile( r"^[A-Za-z_][A-Za-z0-9\-_.]*$" )
_forbidden = re.compile( r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]" )

def sanitize_key ( raw ) :
    r"""Remove every character from ``raw`` that may not appear in an element name."""
    return _unsafe.sub( "", str( raw ) )

def singularize ( tag ) :
    r"""Name the items of ``tag`` by dropping one trailing "s"."""
    if len( tag ) > 1 and tag.endswith( "s" ) :
        return tag[:-1]
    return tag

def is_element_name ( tag ) :
    r"""True if ``tag`` can be written as an unprefixed element name and read back."""
    return _element_name.match( tag ) is not None

def is_numeric_key ( key ) :
    r"""True for keys that only make sense as positions (``0``, ``"12"``, ``"1.5"``)."""
    if isinstance( key, bool ) :
        return False
    if isinstance( key, ( int, float ) ) :
        return True
    return isinstance( key, str ) and _numeric.match( key ) is not None

def _as_index ( key ) :
    if isinstance( key, bool ) :
        return None
    if isinstance( key, int ) :
        return key
    if isinstance( key, str ) and _index.match( key ) :
        return int( key )
    return None

def is_record_like ( value ) :
    r"""True if ``value`` is a dict that does not look like a list.  A dict keyed
    ``0, 1, ..., n-1`` (as ints or as their canonical strings) in exactly that order is
    list-like; any other dict is a record."""
    if not isinstance( value, dict ) :
        return False
    return [ _as_index( key ) for key in value ] != list( range( len( value ) ) )

def classify ( value ) :
    r"""Return the :class:`Shape` of ``value``."""
    if isinstance( value, dict ) :
        return Shape.RECORD if is_record_like( value ) else Shape.SEQUENCE
    if isinstance( value, ( list, tuple ) ) :
        return Shape.SEQUENCE
    return Shape.LEAF

def leaf_text ( value ) :
    r"""Return the element text for the leaf ``value``; raises :class:`InvalidTextError`
    for text XML cannot carry."""
    if value is None :
        return ""
    if isinstance( value, bool ) :
        return "true" if value else "false"
    text = str( value )
    if _forbidden.search( text ) :
        raise InvalidTextError( text )
    return text

def entries ( value ) :
    r"""Iterate the ``( key, child )`` pairs of a record or sequence.  List items are
    keyed by position, which makes them numeric keys."""
    if isinstance( value, dict ) :
        return iter( value.items() )
    return enumerate( value )

#    shapexml/JSON.py - JSON bridge for shapexml.
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
r"""shapexml/JSON.py is a wrapper around :mod:`simplejson` for callers whose payloads
start or end life as JSON text.  Structure values are exactly what JSON decodes to, so
this module mostly moves text between the two notations:

    ``to_xml`` - JSON text in, XML text out (e.g. building a request body).

    ``from_xml`` - XML text in, JSON text out (e.g. handing a response to a
    JSON-speaking consumer).

Numbers are loaded as :class:`decimal.Decimal` by default (``use_decimal``), so an
amount written as ``12.50`` keeps its trailing zero when it becomes element text.  Pass
``use_decimal = False`` to get floats.
"""
import simplejson as json

from shapexml import MalformedDocumentError
from shapexml import XML

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'dumps', 'dump', 'loads', 'load', 'to_xml', 'from_xml' ]

def loads ( s, **kwargs ) :
    r"""Convert the JSON text ``s`` into a structure value.  The keyword arguments are
    those of :func:`simplejson.loads`."""
    kwargs.setdefault( 'use_decimal', True )
    try :
        return json.loads( s, **kwargs )
    except json.JSONDecodeError as ex :
        raise MalformedDocumentError( s, str( ex ) ) from ex

def load ( f, **kwargs ) :
    r"""Read JSON text from the file-like object ``f`` (which has a .read method) and
    convert it into a structure value."""
    return loads( f.read(), **kwargs )

def dumps ( value, **kwargs ) :
    r"""Return the structure ``value`` as JSON text.  The keyword arguments are those of
    :func:`simplejson.dumps`."""
    return json.dumps( value, **kwargs )

def dump ( value, f, **kwargs ) :
    r"""Write the structure ``value`` as JSON text to the file-like object ``f``."""
    json.dump( value, f, **kwargs )

def to_xml ( s, root_tag, declaration = False, **kwargs ) :
    r"""Convert the JSON text ``s`` to XML text rooted at ``root_tag``.  The keyword
    arguments are passed to :class:`shapexml.XML.StructureEncoder`."""
    return XML.dumps( loads( s ), root_tag, declaration = declaration, **kwargs )

def from_xml ( s, **kwargs ) :
    r"""Convert the XML text ``s`` to JSON text.  The keyword arguments are passed to
    :class:`shapexml.XML.StructureDecoder`."""
    return dumps( XML.loads( s, **kwargs ) )

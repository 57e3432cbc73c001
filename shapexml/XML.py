#    shapexml/XML.py - XML encoding and decoding for shapexml.
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
r"""shapexml/XML.py converts structure values to and from XML using ElementTree.  It
provides functions similar to those found in :mod:`pickle` or :mod:`json` (dump, dumps,
load, loads); the difference is that the caller names the root element.

Given the structure::

    { 'Type' : 'ACCREC', 'Contact' : { 'Name' : 'ACME' }
    , 'LineItem' : [ { 'Description' : 'Widget' }, { 'Description' : 'Sprocket' } ] }

encoded under ``Invoices`` the output is::

    <Invoices>
        <Type>ACCREC</Type>
        <Contact><Name>ACME</Name></Contact>
        <LineItem><Description>Widget</Description></LineItem>
        <LineItem><Description>Sprocket</Description></LineItem>
    </Invoices>

The elements produced are:

    <tag>text</tag> - a leaf.  The text is the string form of the value.

    <tag>...</tag> - a record.  contains one child per key, named after the key.

    <tag/><tag/>... - the items of a sequence held under a record key are repeated
        siblings named after that key; there is no wrapping element.

    <Item>...</Item> - a sequence (or numeric key) directly inside an element is named by
        the element's item tag: its own tag less one trailing "s".

    <anon>...</anon> - an item of a list that is itself an item of a list.

Decoding reverses this: an element without children is its text, repeated tags collapse
into a list, ``anon`` children become positional entries, and everything else becomes a
dict keyed by tag.
"""
import logging
import xml.etree.ElementTree as ET

from shapexml import ( Shape, classify, entries, leaf_text, sanitize_key, singularize
    , is_element_name, is_numeric_key, InvalidTagError, MalformedDocumentError
    , DepthExceededError, MARKER_TAG, DEFAULT_MAX_DEPTH )

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'StructureEncoder', 'StructureDecoder', 'marshal', 'unmarshal', 'parse', 'serialize'
    , 'dumps', 'dump', 'loads', 'load' ]

logger = logging.getLogger( __name__ )

class StructureEncoder ( object ) :
    r"""Builds an element tree from a structure value.  Instances only hold
    configuration and may be shared between threads."""
    def __init__ ( self, marker_tag = MARKER_TAG, max_depth = DEFAULT_MAX_DEPTH ) :
        self.marker_tag = marker_tag
        self.max_depth = max_depth

    def encode ( self, value, root_tag ) :
        r"""Return a new ``Element`` named ``root_tag`` holding ``value``."""
        tag = sanitize_key( root_tag )
        if not is_element_name( tag ) :
            raise InvalidTagError( root_tag )
        root = ET.Element( tag )
        if classify( value ) == Shape.LEAF :
            root.text = leaf_text( value )
        else :
            root.extend( self._children( value, singularize( tag ), 1 ) )
        return root

    def _tag ( self, key, item_tag ) :
        if is_numeric_key( key ) :
            return item_tag, True
        tag = sanitize_key( key )
        if not tag or ":" in tag :
            raise InvalidTagError( key )
        if not is_element_name( tag ) :
            return item_tag, True
        return tag, False

    def _children ( self, value, item_tag, depth ) :
        if depth > self.max_depth :
            raise DepthExceededError( depth, self.max_depth )
        out = []
        emitted = set()
        for key, child in entries( value ) :
            tag, numeric = self._tag( key, item_tag )
            if tag in emitted and not numeric :
                logger.debug( "key %r collides with an earlier <%s>; emitting a repeated sibling", key, tag )
            emitted.add( tag )
            out.extend( self.dispatch[ classify( child ) ]( self, tag, child, numeric, depth ) )
        return out

    def _leaf ( self, tag, value, numeric, depth ) :
        e = ET.Element( tag )
        e.text = leaf_text( value )
        return [ e ]

    def _record ( self, tag, value, numeric, depth ) :
        e = ET.Element( tag )
        e.extend( self._children( value, self.marker_tag if numeric else singularize( tag ), depth + 1 ) )
        return [ e ]

    def _sequence ( self, tag, value, numeric, depth ) :
        if not numeric :
            # items of a named list are inlined as siblings of the list's key.
            return self._children( value, tag, depth + 1 )
        e = ET.Element( tag )
        e.extend( self._children( value, self.marker_tag, depth + 1 ) )
        return [ e ]

    dispatch = { Shape.LEAF : _leaf, Shape.RECORD : _record, Shape.SEQUENCE : _sequence }

class StructureDecoder ( object ) :
    r"""Rebuilds a structure value from an element tree."""
    def __init__ ( self, marker_tag = MARKER_TAG, max_depth = DEFAULT_MAX_DEPTH ) :
        self.marker_tag = marker_tag
        self.max_depth = max_depth

    def decode ( self, element ) :
        r"""Return the structure held by ``element`` (an ``Element`` or ``ElementTree``)."""
        if hasattr( element, 'getroot' ) :
            element = element.getroot()
        return self._decode( element, 0 )

    def _decode ( self, element, depth ) :
        if depth > self.max_depth :
            raise DepthExceededError( depth, self.max_depth )
        if len( element ) == 0 :
            return ( element.text or "" ).strip()
        out = {}
        repeated = set()
        positional = True
        for child in element :
            value = self._decode( child, depth + 1 )
            if child.tag == self.marker_tag :
                out[ str( len( out ) ) ] = value
                continue
            positional = False
            key = child.tag
            if key in repeated :
                out[key].append( value )
            elif key in out :
                out[key] = [ out[key], value ]
                repeated.add( key )
            else :
                out[key] = value
        if positional :
            return list( out.values() )
        return out

def marshal ( value, root_tag, **kwargs ) :
    r"""Prepares ``value`` for output as an XML document rooted at ``root_tag``.  The
    keyword arguments are passed to :class:`StructureEncoder`."""
    return ET.ElementTree( StructureEncoder( **kwargs ).encode( value, root_tag ) )

def unmarshal ( xmldoc, **kwargs ) :
    r"""Translates the XML etree (or element) ``xmldoc`` into a structure value.  The
    keyword arguments are passed to :class:`StructureDecoder`."""
    return StructureDecoder( **kwargs ).decode( xmldoc )

def parse ( s ) :
    r"""Parse the XML text ``s`` (str or bytes) into an ``Element``."""
    try :
        return ET.fromstring( s )
    except ET.ParseError as ex :
        raise MalformedDocumentError( s, str( ex ) ) from ex

def serialize ( element, declaration = False ) :
    r"""Return ``element`` as text.  No XML declaration is written unless
    ``declaration`` is set, since request bodies are sent as fragments."""
    if declaration :
        return ET.tostring( element, encoding = "UTF-8", xml_declaration = True ).decode( "UTF-8" )
    return ET.tostring( element, encoding = "unicode" )

def dumps ( value, root_tag, declaration = False, **kwargs ) :
    r"""Dump ``value`` as XML rooted at ``root_tag`` and return it as a string."""
    return serialize( marshal( value, root_tag, **kwargs ).getroot(), declaration )

def dump ( value, f, root_tag, **kwargs ) :
    r"""Dump ``value`` as an XML document rooted at ``root_tag`` to the binary file-like
    object ``f`` (which has a .write method)."""
    marshal( value, root_tag, **kwargs ).write( f, encoding = "UTF-8", xml_declaration = True )

def loads ( s, **kwargs ) :
    r"""Convert the XML string ``s`` back into a structure value."""
    return unmarshal( parse( s ), **kwargs )

def load ( f, **kwargs ) :
    r"""Read an XML document from the file-like object ``f`` and convert it back into a
    structure value."""
    try :
        tree = ET.parse( f )
    except ET.ParseError as ex :
        raise MalformedDocumentError( getattr( f, 'name', f ), str( ex ) ) from ex
    return unmarshal( tree, **kwargs )

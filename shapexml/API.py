#    shapexml/API.py - the request/response boundary of the accounting API.
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
r"""shapexml/API.py is where the codec meets the remote accounting service.  Two entry
points are provided:

    ``request_body`` - turns a payload into the XML fragment placed in a request.

    ``parse_response`` - turns the raw bytes of a response into a structure value, or a
    :class:`RemoteFaultDocument` when the service answered with its own error envelope::

        <ApiException>
            <ErrorNumber>10</ErrorNumber>
            <Type>ValidationException</Type>
            <Message>A validation exception occurred</Message>
            ...
        </ApiException>

A fault document is valid XML, so it is handed back as data rather than raised; call
``exception()`` on it for something raisable.

Signing and transport are not handled here.  :class:`Exchange` ties the two entry points
to a pair of callables supplied by the caller: ``sign( request )`` returning a signed
request, and ``send( signed )`` returning the raw response body.
"""
import logging
import xml.etree.ElementTree as ET

from shapexml import FAULT_TAG
from shapexml.XML import StructureEncoder, StructureDecoder, parse, serialize

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"
__all__ = [ 'Request', 'RemoteFaultDocument', 'RemoteFaultError', 'Exchange'
    , 'request_body', 'parse_response' ]

logger = logging.getLogger( __name__ )

class RemoteFaultError ( Exception ) :
    r"""The raisable form of a :class:`RemoteFaultDocument`."""
    def __init__ ( self, type, message, code ) :
        Exception.__init__( self, "%s: %s" % ( type, message ) )
        self.type = type
        self.message = message
        self.code = code

class RemoteFaultDocument ( object ) :
    r"""An error reported by the remote service.  ``type``, ``message`` and ``code``
    come from the fixed children of the fault envelope; ``detail`` is the whole envelope
    decoded as a structure value and ``document`` is the raw response."""
    __slots__ = ( 'type', 'message', 'code', 'detail', 'document' )
    def __init__ ( self, type, message, code, detail = None, document = None ) :
        self.type = type
        self.message = message
        self.code = code
        self.detail = detail
        self.document = document

    @classmethod
    def from_element ( cls, root, document = None, decoder = None ) :
        text = lambda path : ( root.findtext( path ) or "" ).strip()
        try :
            code = int( text( 'ErrorNumber' ) )
        except ValueError :
            code = 0
        detail = ( decoder or StructureDecoder() ).decode( root )
        return cls( text( 'Type' ), text( 'Message' ), code, detail, document )

    def exception ( self ) :
        return RemoteFaultError( self.type, self.message, self.code )

    def __repr__ ( self ) :
        return "<RemoteFaultDocument: type=%s, code=%d, message=%s>" % ( self.type, self.code, self.message )

class Request ( object ) :
    r"""What is handed to ``sign``: the HTTP verb, the resource name (e.g.
    ``Invoices``), the XML body if any, and free-form query parameters."""
    __slots__ = ( 'method', 'resource', 'body', 'params' )
    def __init__ ( self, method, resource, body = None, params = None ) :
        self.method = method
        self.resource = resource
        self.body = body
        self.params = params or {}

    def __repr__ ( self ) :
        return "<Request: %s %s>" % ( self.method, self.resource )

def request_body ( payload, resource, declaration = False, encoder = None ) :
    r"""Return the XML text for ``payload`` rooted at ``resource``.  An ``Element``
    payload is serialized as it is."""
    if ET.iselement( payload ) :
        root = payload
    else :
        root = ( encoder or StructureEncoder() ).encode( payload, resource )
    return serialize( root, declaration )

def parse_response ( raw, as_tree = False, decoder = None, fault_tag = FAULT_TAG ) :
    r"""Parse the response body ``raw`` (str or bytes).  Returns a
    :class:`RemoteFaultDocument` if the root element is ``fault_tag``; otherwise the
    root ``Element`` when ``as_tree`` is set, or the decoded structure value."""
    root = parse( raw.strip() )
    if root.tag == fault_tag :
        logger.debug( "response is a <%s> fault document", fault_tag )
        return RemoteFaultDocument.from_element( root, raw, decoder )
    if as_tree :
        return root
    return ( decoder or StructureDecoder() ).decode( root )

class Exchange ( object ) :
    r"""Sends requests built from structure values and parses what comes back.  ``sign``
    and ``send`` are the caller's transport; ``encoder`` and ``decoder`` default to the
    standard codec."""
    def __init__ ( self, sign, send, encoder = None, decoder = None, as_tree = False, fault_tag = FAULT_TAG ) :
        self.sign = sign
        self.send = send
        self.encoder = encoder or StructureEncoder()
        self.decoder = decoder or StructureDecoder()
        self.as_tree = as_tree
        self.fault_tag = fault_tag

    def get ( self, resource, **params ) :
        return self.perform( Request( "GET", resource, params = params ) )

    def post ( self, resource, payload ) :
        return self.perform( Request( "POST", resource, request_body( payload, resource, encoder = self.encoder ) ) )

    def put ( self, resource, payload ) :
        return self.perform( Request( "PUT", resource, request_body( payload, resource, encoder = self.encoder ) ) )

    def perform ( self, request ) :
        logger.debug( "%s %s", request.method, request.resource )
        raw = self.send( self.sign( request ) )
        return parse_response( raw, as_tree = self.as_tree, decoder = self.decoder, fault_tag = self.fault_tag )

#!/usr/bin/env python
#    shapexmltest/apitest.py - test cases for the shapexml API boundary
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
import unittest
import xml.etree.ElementTree as ET

from shapexml import MalformedDocumentError
from shapexml.API import ( Exchange, Request, RemoteFaultDocument, RemoteFaultError
    , request_body, parse_response )
from shapexml.XML import StructureDecoder

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

FAULT = b"""<ApiException xmlns:i="http://www.w3.org/2001/XMLSchema-instance">
  <ErrorNumber>10</ErrorNumber>
  <Type>ValidationException</Type>
  <Message>A validation exception occurred</Message>
  <Elements>
    <DataContractBase>
      <ValidationErrors>
        <ValidationError><Message>Email address must be valid.</Message></ValidationError>
      </ValidationErrors>
    </DataContractBase>
  </Elements>
</ApiException>"""

class RequestBodyTests ( unittest.TestCase ) :
    def testFragment ( self ) :
        body = request_body( [ { 'Name' : 'ACME', 'EmailAddress' : 'a@example.com' } ], "Contacts" )
        self.assertEqual( body, "<Contacts><Contact><Name>ACME</Name><EmailAddress>a@example.com</EmailAddress></Contact></Contacts>" )

    def testDeclaration ( self ) :
        self.assertTrue( request_body( { 'Name' : 'ACME' }, "Contacts", declaration = True ).startswith( "<?xml" ) )

    def testElementPayload ( self ) :
        root = ET.Element( "Payments" )
        ET.SubElement( root, "Payment" ).text = "1"
        self.assertEqual( request_body( root, "ignored" ), "<Payments><Payment>1</Payment></Payments>" )

class ParseResponseTests ( unittest.TestCase ) :
    def testStructure ( self ) :
        raw = b"  <Response><Status>OK</Status><Contacts><Contact><Name>A</Name></Contact></Contacts></Response>\n"
        self.assertEqual( parse_response( raw ), { 'Status' : 'OK', 'Contacts' : { 'Contact' : { 'Name' : 'A' } } } )

    def testTree ( self ) :
        root = parse_response( "<Response><Status>OK</Status></Response>", as_tree = True )
        self.assertTrue( ET.iselement( root ) )
        self.assertEqual( root.findtext( 'Status' ), "OK" )

    def testFault ( self ) :
        fault = parse_response( FAULT )
        self.assertIsInstance( fault, RemoteFaultDocument )
        self.assertEqual( fault.type, "ValidationException" )
        self.assertEqual( fault.message, "A validation exception occurred" )
        self.assertEqual( fault.code, 10 )
        self.assertEqual( fault.document, FAULT )
        errors = fault.detail['Elements']['DataContractBase']['ValidationErrors']
        self.assertEqual( errors, { 'ValidationError' : { 'Message' : 'Email address must be valid.' } } )

    def testFaultException ( self ) :
        ex = parse_response( FAULT ).exception()
        self.assertIsInstance( ex, RemoteFaultError )
        self.assertEqual( str( ex ), "ValidationException: A validation exception occurred" )
        self.assertEqual( ex.code, 10 )

    def testFaultWithoutNumber ( self ) :
        fault = parse_response( "<ApiException><Type>X</Type></ApiException>" )
        self.assertEqual( ( fault.type, fault.message, fault.code ), ( "X", "", 0 ) )

    def testFaultTagConfigurable ( self ) :
        self.assertIsInstance( parse_response( "<Oops><Message>m</Message></Oops>", fault_tag = "Oops" ), RemoteFaultDocument )
        self.assertEqual( parse_response( FAULT, fault_tag = "Oops" )['Type'], "ValidationException" )

    def testMalformed ( self ) :
        self.assertRaises( MalformedDocumentError, parse_response, "oauth_problem=signature_invalid" )

class ExchangeTests ( unittest.TestCase ) :
    def setUp ( self ) :
        self.signed = []
        self.sent = []
        self.response = b"<Response><Status>OK</Status></Response>"

    def sign ( self, request ) :
        self.signed.append( request )
        return ( "signed", request )

    def send ( self, signed ) :
        self.sent.append( signed )
        return self.response

    def testGet ( self ) :
        result = Exchange( self.sign, self.send ).get( "Invoices", where = 'Status=="DRAFT"' )
        self.assertEqual( result, { 'Status' : 'OK' } )
        request = self.signed[0]
        self.assertEqual( ( request.method, request.resource, request.body ), ( "GET", "Invoices", None ) )
        self.assertEqual( request.params, { 'where' : 'Status=="DRAFT"' } )
        self.assertEqual( self.sent, [ ( "signed", request ) ] )

    def testPost ( self ) :
        Exchange( self.sign, self.send ).post( "Contacts", [ { 'Name' : 'ACME' } ] )
        request = self.signed[0]
        self.assertEqual( request.method, "POST" )
        self.assertEqual( request.body, "<Contacts><Contact><Name>ACME</Name></Contact></Contacts>" )

    def testPut ( self ) :
        Exchange( self.sign, self.send ).put( "Payments", { 'Payment' : { 'Amount' : '10.00' } } )
        self.assertEqual( self.signed[0].method, "PUT" )
        self.assertEqual( self.signed[0].body, "<Payments><Payment><Amount>10.00</Amount></Payment></Payments>" )

    def testFaultReturned ( self ) :
        self.response = FAULT
        result = Exchange( self.sign, self.send ).get( "Contacts" )
        self.assertIsInstance( result, RemoteFaultDocument )
        self.assertEqual( result.code, 10 )

    def testTree ( self ) :
        root = Exchange( self.sign, self.send, as_tree = True ).get( "Contacts" )
        self.assertEqual( root.tag, "Response" )

    def testDecoderConfig ( self ) :
        self.response = b"<a><a><a>x</a></a></a>"
        exchange = Exchange( self.sign, self.send, decoder = StructureDecoder( max_depth = 1 ) )
        self.assertRaises( ValueError, exchange.get, "Contacts" )

    def testRequestRepr ( self ) :
        self.assertEqual( repr( Request( "GET", "Invoices" ) ), "<Request: GET Invoices>" )

if __name__ == "__main__":
    unittest.main()

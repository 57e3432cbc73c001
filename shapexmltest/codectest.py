#!/usr/bin/env python
#    shapexmltest/codectest.py - test cases for the shapexml encoder, decoder and shape rules
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
import io, unittest
from collections import OrderedDict

from shapexml import ( Shape, classify, is_record_like, is_numeric_key, sanitize_key, singularize
    , leaf_text, is_element_name, InvalidTagError, InvalidTextError, MalformedDocumentError
    , DepthExceededError, ShapeXMLError )
from shapexml.XML import StructureEncoder, StructureDecoder, dumps, dump, loads, load, parse

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

class ShapeRuleTests ( unittest.TestCase ) :
    def testSanitize ( self ) :
        self.assertEqual( sanitize_key( "Due Date" ), "DueDate" )
        self.assertEqual( sanitize_key( "a-b_c.d:e" ), "a-b_c.d:e" )
        self.assertEqual( sanitize_key( "Café/€" ), "Caf" )
        self.assertEqual( sanitize_key( 12 ), "12" )
        self.assertEqual( sanitize_key( "!!" ), "" )

    def testSanitizeIdempotent ( self ) :
        for k in [ "", "Name", "Due Date", "<tag>", "a b\tc\n", "Ünïcödé", "x:y.z-1_2", "%%%" ] :
            self.assertEqual( sanitize_key( sanitize_key( k ) ), sanitize_key( k ) )

    def testSingularize ( self ) :
        self.assertEqual( singularize( "Invoices" ), "Invoice" )
        self.assertEqual( singularize( "Address" ), "Addres" )
        self.assertEqual( singularize( "Contact" ), "Contact" )
        self.assertEqual( singularize( "s" ), "s" )

    def testNumericKeys ( self ) :
        for k in [ 0, 3, 1.5, "0", "12", "-2", "1.5", "1e3", " 7" ] :
            self.assertTrue( is_numeric_key( k ), k )
        for k in [ True, "Name", "1st", "", "0x1f", None ] :
            self.assertFalse( is_numeric_key( k ), k )

    def testRecordLike ( self ) :
        self.assertFalse( is_record_like( {} ) )
        self.assertFalse( is_record_like( { 0 : 'a', 1 : 'b' } ) )
        self.assertFalse( is_record_like( { '0' : 'a', '1' : 'b' } ) )
        self.assertTrue( is_record_like( { '1' : 'a', '0' : 'b' } ) )
        self.assertTrue( is_record_like( { '0' : 'a', '2' : 'b' } ) )
        self.assertTrue( is_record_like( { '00' : 'a' } ) )
        self.assertTrue( is_record_like( { 'Name' : 'a' } ) )
        self.assertFalse( is_record_like( [ 'a' ] ) )

    def testClassify ( self ) :
        self.assertEqual( classify( "x" ), Shape.LEAF )
        self.assertEqual( classify( None ), Shape.LEAF )
        self.assertEqual( classify( 3 ), Shape.LEAF )
        self.assertEqual( classify( ( 1, 2 ) ), Shape.SEQUENCE )
        self.assertEqual( classify( [] ), Shape.SEQUENCE )
        self.assertEqual( classify( OrderedDict( [ ( 0, 'a' ) ] ) ), Shape.SEQUENCE )
        self.assertEqual( classify( { 'a' : 1 } ), Shape.RECORD )

    def testLeafText ( self ) :
        self.assertEqual( leaf_text( None ), "" )
        self.assertEqual( leaf_text( True ), "true" )
        self.assertEqual( leaf_text( 0 ), "0" )
        self.assertEqual( leaf_text( 2.5 ), "2.5" )
        self.assertEqual( leaf_text( "tab\tline\r\n" ), "tab\tline\r\n" )
        self.assertRaises( InvalidTextError, leaf_text, "bell\x07" )
        self.assertRaises( InvalidTextError, leaf_text, "\x00" )
        self.assertRaises( InvalidTextError, leaf_text, "\ufffe" )

    def testElementName ( self ) :
        for tag in [ "Name", "_x", "Due.Date", "a-b_1" ] :
            self.assertTrue( is_element_name( tag ), tag )
        for tag in [ "", "1st", "-a", ".a", "a:b", ":", ":a" ] :
            self.assertFalse( is_element_name( tag ), tag )

    def testErrorsAreValueErrors ( self ) :
        for kind in ( InvalidTagError, InvalidTextError, MalformedDocumentError, DepthExceededError ) :
            self.assertTrue( issubclass( kind, ShapeXMLError ) )
            self.assertTrue( issubclass( kind, ValueError ) )

class EncoderTests ( unittest.TestCase ) :
    def testNumericKeysSingularized ( self ) :
        self.assertEqual( dumps( { '0' : 'a', '1' : 'b' }, "Items" ), "<Items><Item>a</Item><Item>b</Item></Items>" )

    def testNamedListInlined ( self ) :
        xml = dumps( { 'LineItem' : [ { 'Description' : 'Widget' }, { 'Description' : 'Sprocket' } ] }, "Invoices" )
        self.assertEqual( xml, "<Invoices><LineItem><Description>Widget</Description></LineItem>"
            "<LineItem><Description>Sprocket</Description></LineItem></Invoices>" )

    def testTopLevelRecords ( self ) :
        xml = dumps( [ { 'Type' : 'ACCREC' }, { 'Type' : 'ACCPAY' } ], "Invoices" )
        self.assertEqual( xml, "<Invoices><Invoice><Type>ACCREC</Type></Invoice><Invoice><Type>ACCPAY</Type></Invoice></Invoices>" )

    def testNestedListUsesMarker ( self ) :
        xml = dumps( [ [ 'a', 'b' ] ], "Rows" )
        self.assertEqual( xml, "<Rows><Row><anon>a</anon><anon>b</anon></Row></Rows>" )

    def testNumericKeyInsideRecordItem ( self ) :
        xml = dumps( [ { 'Name' : 'x', '0' : 'y' } ], "Contacts" )
        self.assertEqual( xml, "<Contacts><Contact><Name>x</Name><anon>y</anon></Contact></Contacts>" )

    def testRecordItemTag ( self ) :
        xml = dumps( { 'Tracking' : { 'Name' : 'Region', '5' : 'North' } }, "Invoices" )
        self.assertEqual( xml, "<Invoices><Tracking><Name>Region</Name><Tracking>North</Tracking></Tracking></Invoices>" )

    def testCustomMarker ( self ) :
        xml = dumps( [ [ 'a' ] ], "Rows", marker_tag = "item" )
        self.assertEqual( xml, "<Rows><Row><item>a</item></Row></Rows>" )
        self.assertEqual( loads( xml, marker_tag = "item" ), { 'Row' : [ 'a' ] } )

    def testEmpty ( self ) :
        self.assertEqual( dumps( {}, "Items" ), "<Items />" )
        self.assertEqual( dumps( None, "Items" ), "<Items />" )
        self.assertEqual( dumps( { 'Phone' : [] }, "Contacts" ), "<Contacts />" )

    def testRootTag ( self ) :
        self.assertEqual( dumps( "x", "Bank Transactions" ), "<BankTransactions>x</BankTransactions>" )
        self.assertRaises( InvalidTagError, dumps, "x", "???" )
        self.assertRaises( InvalidTagError, dumps, "x", "123" )
        self.assertRaises( InvalidTagError, dumps, "x", ":" )
        self.assertRaises( InvalidTagError, dumps, "x", "ns:Items" )

    def testPrefixedKeyRefused ( self ) :
        with self.assertRaises( InvalidTagError ) as cm :
            dumps( { "a:b" : "x" }, "Items" )
        self.assertEqual( cm.exception.tag, "a:b" )

    def testEncodedTagsReadBack ( self ) :
        data = { "Due Date" : "1", "x.y-z_1" : "2", "1st" : "3", "0" : [ "a", "b" ] }
        self.assertEqual( loads( dumps( data, "Items" ) ), { "DueDate" : "1", "x.y-z_1" : "2", "Item" : [ "3", [ "a", "b" ] ] } )

    def testUnwritableTextRefused ( self ) :
        with self.assertRaises( InvalidTextError ) as cm :
            dumps( { "Note" : "a\x01b" }, "Items" )
        self.assertEqual( cm.exception.text, "a\x01b" )
        self.assertRaises( InvalidTextError, dumps, "\x0b", "Items" )

    def testInvalidKeyReported ( self ) :
        with self.assertRaises( InvalidTagError ) as cm :
            StructureEncoder().encode( { 'Name' : 'x', '  ' : 'y' }, "Contacts" )
        self.assertEqual( cm.exception.tag, '  ' )

    def testDeclaration ( self ) :
        xml = dumps( { 'Name' : 'x' }, "Contacts", declaration = True )
        self.assertTrue( xml.startswith( "<?xml" ) )
        self.assertTrue( xml.endswith( "<Contacts><Name>x</Name></Contacts>" ) )
        self.assertFalse( dumps( { 'Name' : 'x' }, "Contacts" ).startswith( "<?xml" ) )

    def testCycle ( self ) :
        data = { 'Name' : 'loop' }
        data['Self'] = data
        self.assertRaises( DepthExceededError, dumps, data, "Contacts" )

    def testDepthBound ( self ) :
        data = 'bottom'
        for _ in range( 10 ) :
            data = { 'Level' : data }
        self.assertRaises( DepthExceededError, StructureEncoder( max_depth = 5 ).encode, data, "Root" )
        StructureEncoder( max_depth = 10 ).encode( data, "Root" )

    def testEncoderReturnsNewTrees ( self ) :
        encoder = StructureEncoder()
        a = encoder.encode( { 'Name' : 'x' }, "Contacts" )
        b = encoder.encode( { 'Name' : 'x' }, "Contacts" )
        self.assertIsNot( a, b )
        self.assertEqual( a.find( 'Name' ).text, "x" )

class DecoderTests ( unittest.TestCase ) :
    def testLeaves ( self ) :
        self.assertEqual( loads( "<Name>  ACME </Name>" ), "ACME" )
        self.assertEqual( loads( "<Name/>" ), "" )

    def testRepetition ( self ) :
        doc = "<Items><Item>a</Item><Item>b</Item></Items>"
        self.assertEqual( loads( doc ), { 'Item' : [ 'a', 'b' ] } )

    def testRepetitionOfLists ( self ) :
        """A decoded list is not mistaken for an earlier repetition"""
        doc = "<Rows><Row><anon>a</anon><anon>b</anon></Row><Row><anon>c</anon><anon>d</anon></Row></Rows>"
        self.assertEqual( loads( doc ), { 'Row' : [ [ 'a', 'b' ], [ 'c', 'd' ] ] } )

    def testMixedMarker ( self ) :
        doc = "<Contact><Name>x</Name><anon>y</anon><Phone>1</Phone><Phone>2</Phone><anon>z</anon></Contact>"
        self.assertEqual( loads( doc ), { 'Name' : 'x', '1' : 'y', 'Phone' : [ '1', '2' ], '3' : 'z' } )

    def testOrderPreserved ( self ) :
        result = loads( "<C><B>1</B><A>2</A><B>3</B></C>" )
        self.assertEqual( list( result.items() ), [ ( 'B', [ '1', '3' ] ), ( 'A', '2' ) ] )

    def testTextIgnoredBesideChildren ( self ) :
        self.assertEqual( loads( "<C>stray<A>1</A>tail</C>" ), { 'A' : '1' } )

    def testMalformed ( self ) :
        with self.assertRaises( MalformedDocumentError ) as cm :
            loads( "<unterminated" )
        self.assertEqual( cm.exception.document, "<unterminated" )
        self.assertRaises( MalformedDocumentError, loads, "" )
        self.assertRaises( MalformedDocumentError, parse, b"<a></b>" )

    def testDepthBound ( self ) :
        doc = "<a>" * 200 + "x" + "</a>" * 200
        self.assertRaises( DepthExceededError, loads, doc )
        self.assertEqual( loads( "<a>" * 5 + "x" + "</a>" * 5, max_depth = 5 ), { 'a' : { 'a' : { 'a' : { 'a' : 'x' } } } } )
        self.assertRaises( DepthExceededError, loads, "<a>" * 7 + "x" + "</a>" * 7, max_depth = 5 )

    def testDecoderAcceptsTree ( self ) :
        tree = load( io.BytesIO( b"<Contacts><Contact>a</Contact></Contacts>" ) )
        self.assertEqual( tree, { 'Contact' : 'a' } )
        self.assertRaises( MalformedDocumentError, load, io.BytesIO( b"<Contacts>" ) )

    def testFileRoundTrip ( self ) :
        f = io.BytesIO()
        dump( { 'Phone' : [ '1', '2' ], 'Name' : 'Ünï' }, f, "Contacts" )
        self.assertTrue( f.getvalue().startswith( b"<?xml" ) )
        f.seek( 0 )
        self.assertEqual( load( f ), { 'Phone' : [ '1', '2' ], 'Name' : 'Ünï' } )

    def testStructureDecoderDirect ( self ) :
        root = parse( "<Items><anon>a</anon><anon>b</anon></Items>" )
        self.assertEqual( StructureDecoder().decode( root ), [ 'a', 'b' ] )

if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python
#    shapexmltest/jsontest.py - test cases for shapexml over the JSON bridge
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
from decimal import Decimal

import simplejson

from shapexml import MalformedDocumentError
from shapexml.JSON import dumps, dump, loads, load, to_xml, from_xml
import shapexmltest

__version__ = "0.1"
__author__ = "Shawn Sulma <genosha@470th.org>"

class ShapeJSONTests ( shapexmltest.ShapeTests ) :
    def setUp ( self ) :
        self.marshal = lambda o : to_xml( simplejson.dumps( o ), shapexmltest.ROOT )
        self.unmarshal = lambda s : simplejson.loads( from_xml( s ) )

    def testDecimalAmounts ( self ) :
        """Amounts keep their written precision on the way to XML"""
        s = to_xml( '{"UnitAmount": 12.50, "Quantity": 2}', "LineItems" )
        self.assertEqual( s, "<LineItems><UnitAmount>12.50</UnitAmount><Quantity>2</Quantity></LineItems>" )

    def testFloatAmounts ( self ) :
        self.assertEqual( loads( '{"UnitAmount": 12.50}', use_decimal = False ), { 'UnitAmount' : 12.5 } )
        self.assertEqual( loads( '{"UnitAmount": 12.50}' ), { 'UnitAmount' : Decimal( "12.50" ) } )

    def testMalformed ( self ) :
        """Broken JSON raises MalformedDocumentError"""
        with self.assertRaises( MalformedDocumentError ) as cm :
            loads( '{"Name": ' )
        self.assertEqual( cm.exception.document, '{"Name": ' )

    def testFiles ( self ) :
        out = io.StringIO()
        dump( { 'Name' : 'ACME' }, out )
        self.assertEqual( load( io.StringIO( out.getvalue() ) ), { 'Name' : 'ACME' } )
        self.assertEqual( dumps( [ 'a' ] ), '["a"]' )

    def testFromXML ( self ) :
        s = from_xml( "<Contacts><Contact><Name>A</Name></Contact><Contact><Name>B</Name></Contact></Contacts>" )
        self.assertEqual( simplejson.loads( s ), { 'Contact' : [ { 'Name' : 'A' }, { 'Name' : 'B' } ] } )

if __name__ == "__main__":
    unittest.main()

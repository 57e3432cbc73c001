import unittest

from shapexml import InvalidTagError, InvalidTextError, DepthExceededError

ROOT = "Items"

class DefaultTestCase(unittest.TestCase):
    def _perform( self, data, expected = None ) :
        if expected is None :
            expected = data
        _marshal = self.marshal( data )
        result = self.unmarshal( _marshal )
        self.assertEqual( result, expected )
        return result

    def runTest( self ) :
        pass

class ShapeTests( DefaultTestCase ) :
    def testLeaf ( self ) :
        """A bare scalar becomes the root element's text"""
        self._perform( "ACME Ltd" )

    def testRecord ( self ) :
        """Test a flat record"""
        data = { 'Name' : 'ACME Ltd', 'AccountNumber' : 'A-100', 'TaxNumber' : '12-345' }
        result = self._perform( data )
        self.assertEqual( list( result ), [ 'Name', 'AccountNumber', 'TaxNumber' ] )

    def testNestedRecord ( self ) :
        """Test records inside records"""
        data = { 'Contact' : { 'Name' : 'ACME', 'Address' : { 'City' : 'Wellington', 'Country' : 'NZ' } }, 'Status' : 'DRAFT' }
        self._perform( data )

    def testScalarsFlattened ( self ) :
        """Numbers, booleans and None come back as text"""
        data = { 'Quantity' : 3, 'IsSupplier' : True, 'IsCustomer' : False, 'Reference' : None }
        expected = { 'Quantity' : '3', 'IsSupplier' : 'true', 'IsCustomer' : 'false', 'Reference' : '' }
        self._perform( data, expected )

    def testRepeatedList ( self ) :
        """A list under a key becomes repeated siblings and comes back as a list"""
        data = { 'Name' : 'x', 'Phone' : [ '555-1000', '555-2000', '555-3000' ] }
        self._perform( data )

    def testListOfRecords ( self ) :
        """Test a list of records under a key"""
        data = { 'Type' : 'ACCREC', 'LineItem' : [ { 'Description' : 'Widget', 'Quantity' : '1' }
            , { 'Description' : 'Sprocket', 'Quantity' : '4' } ] }
        self._perform( data )

    def testListOfLists ( self ) :
        """Lists nested in lists go through the marker tag"""
        data = { 'Row' : [ [ 'a', 'b' ], [ 'c', 'd', 'e' ] ] }
        self._perform( data )

    def testSingleItemList ( self ) :
        """A one-item list cannot be told apart from a bare value"""
        data = { 'Phone' : [ '555-1000' ] }
        self._perform( data, { 'Phone' : '555-1000' } )

    def testNumericKeys ( self ) :
        """Numeric keys are named after the singular root tag"""
        data = { '0' : 'a', '1' : 'b' }
        self._perform( data, { 'Item' : [ 'a', 'b' ] } )

    def testTopLevelSequence ( self ) :
        """A sequence at the root is keyed by the item tag"""
        self._perform( [ 'a', 'b', 'c' ], { 'Item' : [ 'a', 'b', 'c' ] } )

    def testTopLevelSingleItem ( self ) :
        """A one-item sequence at the root decodes to the bare item"""
        self._perform( [ { 'Name' : 'only' } ], { 'Item' : { 'Name' : 'only' } } )

    def testDenseKeysAreSequence ( self ) :
        """A dict keyed 0..n-1 is treated as a list"""
        data = { 'Phone' : { '0' : '555-1000', '1' : '555-2000' } }
        self._perform( data, { 'Phone' : [ '555-1000', '555-2000' ] } )

    def testOutOfOrderKeysAreRecord ( self ) :
        """Integer keys out of order make a record, named after the singular of its key"""
        data = { 'Tracking' : { '1' : 'a', '0' : 'b' } }
        self._perform( data, { 'Tracking' : { 'Tracking' : [ 'a', 'b' ] } } )

    def testSanitizedKey ( self ) :
        """Characters not allowed in element names are dropped"""
        self._perform( { 'Due Date!' : '2012-05-01' }, { 'DueDate' : '2012-05-01' } )

    def testCollidingKeys ( self ) :
        """Keys equal after sanitizing come back as one list"""
        data = { 'Due Date' : 'a', 'DueDate' : 'b' }
        self._perform( data, { 'DueDate' : [ 'a', 'b' ] } )

    def testNonNameKey ( self ) :
        """A key that cannot start an element name takes the item tag"""
        self._perform( { '1st' : 'a', 'Name' : 'b' }, { 'Item' : 'a', 'Name' : 'b' } )

    def testEmptyList ( self ) :
        """Empty lists leave nothing behind"""
        self._perform( { 'Name' : 'x', 'Phone' : [] }, { 'Name' : 'x' } )

    def testEmptyRoot ( self ) :
        """An empty structure leaves an empty root element"""
        self._perform( {}, '' )

    def testWhitespaceTrimmed ( self ) :
        """Leaf text comes back stripped"""
        self._perform( { 'Name' : '  padded  ' }, { 'Name' : 'padded' } )

    def testEscape ( self ) :
        """Text requiring escaping survives"""
        self._perform( { 'Note' : '<b>Tom & Jerry</b> "quoted"' } )

    def testUnicode ( self ) :
        """Non-ASCII text survives"""
        self._perform( { 'Name' : 'Café Māori' } )

    def testInvalidKey ( self ) :
        """Keys with nothing usable left raise InvalidTagError"""
        self.assertRaises( InvalidTagError, self.marshal, { '!!!' : 'x' } )

    def testDepthExceeded ( self ) :
        """Overly deep input fails cleanly"""
        data = 'bottom'
        for _ in range( 200 ) :
            data = { 'Level' : data }
        self.assertRaises( DepthExceededError, self.marshal, data )

    def testPrefixedKey ( self ) :
        """A key holding a colon is refused rather than written unreadable"""
        self.assertRaises( InvalidTagError, self.marshal, { 'a:b' : 'x' } )
        self.assertRaises( InvalidTagError, self.marshal, { 'Name' : { ':' : 'x' } } )

    def testUnwritableText ( self ) :
        """Control characters XML cannot carry are refused"""
        self.assertRaises( InvalidTextError, self.marshal, { 'Note' : 'a\x01b' } )
        self.assertRaises( InvalidTextError, self.marshal, [ 'ok', 'tab\x0bbed' ] )
        self._perform( { 'Note' : 'tab\tline\nreturn' }, { 'Note' : 'tab\tline\nreturn' } )

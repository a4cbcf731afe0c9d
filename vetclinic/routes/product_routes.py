from flask_restx import Namespace, Resource, fields

from vetclinic.errors import NotFoundError
from vetclinic.repositories import product_repository
from vetclinic.repositories.products import get_products_in_stock
from vetclinic.services import product_service
from vetclinic.utils.auth_middleware import token_required
from vetclinic.utils.util import json_body

product_ns = Namespace('productos', description='Productos de la tienda', path='/productos')

product_model = product_ns.model('Producto', {
    'nombre': fields.String(required=True),
    'precio': fields.Float(required=True, description='Mayor a 0'),
    'cantidad': fields.Integer(required=True, min=0)
})


@product_ns.route('')
class ProductList(Resource):
    @token_required
    @product_ns.doc('list_products', security='BearerAuth')
    def get(self):
        """Obtener todos los productos"""
        return product_repository.get_all(), 200

    @token_required
    @product_ns.expect(product_model)
    @product_ns.doc('create_product', security='BearerAuth')
    def post(self):
        """Crear un producto"""
        data = json_body()
        product = product_service.create_product(data)
        return {
            'mensaje': 'Producto creado exitosamente',
            'producto': product
        }, 201


@product_ns.route('/stock')
class ProductStock(Resource):
    @token_required
    @product_ns.doc('list_products_in_stock', security='BearerAuth')
    def get(self):
        """Obtener productos con stock disponible"""
        return get_products_in_stock(product_repository), 200


@product_ns.route('/<int:product_id>')
class ProductResource(Resource):
    @token_required
    @product_ns.doc('get_product', security='BearerAuth')
    def get(self, product_id):
        """Obtener un producto por ID"""
        product = product_repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError('Producto no encontrado')
        return product, 200

    @token_required
    @product_ns.expect(product_model)
    @product_ns.doc('update_product', security='BearerAuth')
    def put(self, product_id):
        """Actualizar un producto"""
        data = json_body()
        return product_service.update_product(product_id, data), 200

    @token_required
    @product_ns.doc('delete_product', security='BearerAuth')
    def delete(self, product_id):
        """Eliminar un producto"""
        product_repository.delete(product_id)
        return '', 204

from sqlalchemy import CHAR, Column, Date, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# ============================================================
# Sample retail schema handed to the LLM as grounding context.
# The service only reads it; scripts/init_db.py creates it for local dev.
# ============================================================


class Vendor(Base):
    """Suppliers of the products"""
    __tablename__ = 'vendors'

    vend_id = Column(CHAR(10), primary_key=True)
    vend_name = Column(CHAR(50), nullable=False)
    vend_address = Column(CHAR(50), nullable=True)
    vend_city = Column(CHAR(50), nullable=True)
    vend_state = Column(CHAR(5), nullable=True)
    vend_zip = Column(CHAR(10), nullable=True)
    vend_country = Column(CHAR(50), nullable=True)


class Product(Base):
    """Product catalog, one vendor per product"""
    __tablename__ = 'products'

    prod_id = Column(CHAR(10), primary_key=True)
    vend_id = Column(CHAR(10), ForeignKey('vendors.vend_id'), nullable=False)
    prod_name = Column(CHAR(255), nullable=False)
    prod_price = Column(Numeric(8, 2), nullable=False)
    prod_desc = Column(String(1000), nullable=True)


class Customer(Base):
    __tablename__ = 'customers'

    cust_id = Column(CHAR(10), primary_key=True)
    cust_name = Column(CHAR(50), nullable=False)
    cust_address = Column(CHAR(50), nullable=True)
    cust_city = Column(CHAR(50), nullable=True)
    cust_state = Column(CHAR(5), nullable=True)
    cust_zip = Column(CHAR(10), nullable=True)
    cust_country = Column(CHAR(50), nullable=True)
    cust_contact = Column(CHAR(50), nullable=True)
    cust_email = Column(CHAR(255), nullable=True)


class Order(Base):
    __tablename__ = 'orders'

    order_num = Column(Integer, primary_key=True)
    order_date = Column(Date, nullable=False)
    cust_id = Column(CHAR(10), ForeignKey('customers.cust_id'), nullable=False)


class OrderItem(Base):
    """Line items; (order_num, order_item) identifies a row"""
    __tablename__ = 'orderitems'

    order_num = Column(Integer, ForeignKey('orders.order_num'), primary_key=True)
    order_item = Column(Integer, primary_key=True)
    prod_id = Column(CHAR(10), ForeignKey('products.prod_id'), nullable=False)
    quantity = Column(Integer, nullable=False)
    item_price = Column(Numeric(8, 2), nullable=False)

from .user_model import User, DEFAULT_ROLE
from .owner_model import Owner
from .pet_model import Pet, PetSex
from .product_model import Product
from .reservation_model import Reservation, ReservationStatus, AppointmentType
from .patient_model import Patient

from vetclinic.models import Owner, Patient, Pet, Product, Reservation, User
from .generic import Repository, commit_transaction

owner_repository = Repository(Owner, 'Dueño no encontrado')
pet_repository = Repository(Pet, 'Mascota no encontrada')
product_repository = Repository(Product, 'Producto no encontrado')
reservation_repository = Repository(Reservation, 'Reservación no encontrada')
user_repository = Repository(User, 'Usuario no encontrado')
patient_repository = Repository(Patient, 'Paciente no encontrado')

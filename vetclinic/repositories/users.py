def get_user_by_email(repo, email):
    """Full user row, password hash included, or None."""
    with repo.storage_guard('get_user_by_email'):
        user = repo.model.query.filter_by(email=email).first()
    return user.to_dict() if user is not None else None

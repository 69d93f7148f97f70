from app.services.post_validator import cli

if __name__ == "__main__":
    cli()

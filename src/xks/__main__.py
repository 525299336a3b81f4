from xks.manage_aks import app

if __name__ == "__main__":
    app()

"""
WSGI 应用程序入口 - 生产部署使用

    gunicorn -w 4 wsgi:app

多个 worker 进程时请设置 RATE_LIMIT_USE_REDIS=true 以共享限流计数。
"""
import os
from app import create_app

# 根据环境变量选择配置
env = os.getenv('FLASK_ENV', 'production')
app = create_app(env)

if __name__ == "__main__":
    app.run()

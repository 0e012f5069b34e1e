from fastapi.testclient import TestClient

from semita.config.storage import get_store
from semita.main import app
from semita.storage.memory import MemoryStore

STORE = MemoryStore()
app.dependency_overrides[get_store] = lambda: STORE

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
resp = client.get('/health/db')
print(resp.status_code, resp.json())

print('\nINIT SERVICES:')
print(client.post('/services/init').json())

print('\nREPORT OUTAGE:')
resp = client.post('/services/water/status', json={
    'status': 'outage', 'description': 'Main line burst', 'reportedBy': 'resident1'})
print(resp.status_code, resp.json())

print('\nSUBMIT COMPLAINT:')
resp = client.post('/complaints', json={
    'title': 'Leak', 'category': 'Water Supply', 'description': 'Pipe burst', 'location': 'Block A'})
print(resp.status_code, resp.json())
complaint_id = resp.json()['complaint']['id']

print('\nVOTE:')
print(client.post(f'/complaints/{complaint_id}/vote', json={'userId': 'resident1', 'direction': 'up'}).json())

print('\nNOTIFICATIONS:')
print(client.get('/notifications').json())

print('\nINSIGHTS:')
print(client.get('/insights').json())
